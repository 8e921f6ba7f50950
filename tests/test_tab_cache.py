from app.schemas.availability import SheetInfo
from app.services.tab_cache import TabCache


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


def put(cache, spreadsheet_id, credential="AIzaSyABCDEFG"):
    key = TabCache.make_key(spreadsheet_id, credential)
    cache.set(key, spreadsheet_id, [SheetInfo(title="Червень 2025")], [])
    return key


class TestTabCache:
    def test_key_uses_credential_prefix(self):
        assert TabCache.make_key("sheet", "AIzaSyABCDEFG") == "sheet_AIzaSyAB"

    def test_hit_within_ttl(self):
        clock = FakeClock()
        cache = TabCache(ttl_seconds=60, max_entries=5, clock=clock)
        key = put(cache, "sheet-a")

        clock.now += 59
        entry = cache.get(key)
        assert entry is not None
        assert entry.tabs[0].title == "Червень 2025"

    def test_expired_entry_evicted(self):
        clock = FakeClock()
        cache = TabCache(ttl_seconds=60, max_entries=5, clock=clock)
        key = put(cache, "sheet-a")

        clock.now += 60
        assert cache.get(key) is None
        assert len(cache) == 0

    def test_keeps_newest_entries(self):
        clock = FakeClock()
        cache = TabCache(ttl_seconds=3600, max_entries=2, clock=clock)
        keys = []
        for name in ("a", "b", "c"):
            keys.append(put(cache, name))
            clock.now += 1

        assert len(cache) == 2
        assert cache.get(keys[0]) is None
        assert cache.get(keys[1]) is not None
        assert cache.get(keys[2]) is not None

    def test_clear_single_spreadsheet(self):
        cache = TabCache(ttl_seconds=3600, max_entries=5, clock=FakeClock())
        put(cache, "sheet-a")
        kept = put(cache, "sheet-b")

        assert cache.clear("sheet-a") == 1
        assert cache.get(kept) is not None
        assert cache.clear() == 1
        assert len(cache) == 0

    def test_clear_leaves_ids_sharing_a_prefix(self):
        cache = TabCache(ttl_seconds=3600, max_entries=5, clock=FakeClock())
        put(cache, "abc")
        kept = put(cache, "abcdef")

        assert cache.clear("abc") == 1
        assert cache.get(kept) is not None

    def test_evict(self):
        cache = TabCache(ttl_seconds=3600, max_entries=5, clock=FakeClock())
        key = put(cache, "sheet-a")
        assert cache.evict(key)
        assert not cache.evict(key)

    def test_stats_in_minutes(self):
        clock = FakeClock()
        cache = TabCache(ttl_seconds=24 * 60 * 60, max_entries=5, clock=clock)
        put(cache, "sheet-a")
        clock.now += 30 * 60

        stats = cache.stats()
        assert stats["size"] == 1
        assert stats["entries"] == [{"spreadsheetId": "sheet-a", "age": 30, "expiresIn": 1410}]
