"""
Каталог номерів: статичні дані для відображення та фільтра за кількістю гостей.
"""
from typing import Iterable, Optional

from app.schemas.availability import RoomInfo
from app.schemas.room import RoomConfig

_VIEW = "вихід на терассу · вид на гори"


def _images(folder: str, *files: str) -> list[str]:
    return [f"/assets/images/rooms/{folder}/{name}" for name in files]


ROOMS_CONFIG: dict[int, RoomConfig] = {
    1: RoomConfig(
        room_number=1,
        room_name="Кімната 1",
        name="№1 Cтандарт",
        description=f"2 гостя · 1 спальня · 1 двухспальне ліжко · 1 санвузол · {_VIEW}",
        max_persons=2,
        price=2300,
        images=_images("room-1", "room-1.jpeg", "bed-1.jpeg", "view-1.jpeg", "wc-1.jpeg", "window-1.jpeg"),
    ),
    2: RoomConfig(
        room_number=2,
        room_name="Кімната 2",
        name="№2 Люкс",
        description=f"2-3 гостя · 1 спальня · 1 двоспальне ліжко · 1 санвузол · {_VIEW}",
        max_persons=3,
        price=2500,
        images=_images("room-2", "bed-2.jpg", "overview-2.jpg", "room-2.jpg", "view-2.jpg", "wc-2.jpg"),
    ),
    3: RoomConfig(
        room_number=3,
        room_name="Кімната 3",
        name="№3 Люкс",
        description=f"2 гостя · 1 спальня · 1 двоспальне ліжко · 1 санвузол · {_VIEW}",
        max_persons=2,
        price=2500,
        images=_images("room-3", "bed-3.jpg", "overview-3.jpg", "room-3.jpg", "view-3.jpeg", "wc-3.jpg"),
    ),
    4: RoomConfig(
        room_number=4,
        room_name="Кімната 4",
        name="№4 Делюкс",
        description=f"2 гостя · 1 спальня · 1 двоспальне ліжко · 1 санвузол · {_VIEW}",
        max_persons=2,
        price=2700,
        images=_images("room-4", "bed-4.jpg", "overview-4.jpeg", "room-4.jpg", "view-4.jpeg", "wc-4.jpeg"),
    ),
    5: RoomConfig(
        room_number=5,
        room_name="Кімната 5",
        name="№5 Делюкс",
        description=f"2 гостя · 1 спальня · 1 двоспальне ліжко · 1 санвузол · {_VIEW}",
        max_persons=2,
        price=2700,
        images=_images("room-5", "overview-5.jpeg", "bed-5.jpeg", "room-5.jpg", "view-5.jpg", "wc-5.jpg"),
    ),
    6: RoomConfig(
        room_number=6,
        room_name="Кімната 6",
        name="№6 Делюкс",
        description=f"2-3 гостя · 1 спальня · 1 двоспальне ліжко · 1 санвузол · {_VIEW}",
        max_persons=3,
        price=2700,
        images=_images("room-6", "bed-6.jpg", "overview-6.jpeg", "room-6.jpg", "view-6.jpg", "wc-6.jpg"),
    ),
    7: RoomConfig(
        room_number=7,
        room_name="Mirador",
        name="Коттедж Mirador",
        description=(
            "2-4 гостя · 1 двоспальне ліжко · 1 розкладна канапа · кухня · "
            f"1 санвузол · {_VIEW}"
        ),
        max_persons=4,
        price=4500,
        images=_images(
            "mirador",
            "view-mirador.jpg",
            "room-mirador.jpeg",
            "kitchen-mirador.jpeg",
            "wc-mirador.jpeg",
            "outside-mirador.jpg",
        ),
    ),
}


def get_room_config(room_number: int) -> Optional[RoomConfig]:
    return ROOMS_CONFIG.get(room_number)



def get_room_config_list(room_numbers: Iterable[int]) -> list[RoomConfig]:
    """Configs for the given numbers, silently skipping unknown rooms."""
    return [
        config
        for config in (get_room_config(n) for n in room_numbers)
        if config is not None
    ]


def get_room_info(room_number: int) -> Optional[RoomInfo]:
    config = get_room_config(room_number)
    if config is None:
        return None
    return RoomInfo(room_number=config.room_number, room_name=config.room_name)
