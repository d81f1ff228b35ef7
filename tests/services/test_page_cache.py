from portfolio.services.cache import PageCache, invalidate_blog, page_cache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = PageCache(clock=clock)
    cache.set("/", "<html>", ttl=60)
    assert cache.get("/") == "<html>"

    clock.now += 59
    assert cache.get("/") == "<html>"

    clock.now += 1
    assert cache.get("/") is None
    assert "/" not in cache.keys()


def test_mark_stale_drops_only_named_paths():
    cache = PageCache()
    cache.set("/", "home")
    cache.set("/blog", "blog")
    cache.set("/admin/profile", "profile")

    cache.mark_stale("/", "/admin/profile", "/missing")

    assert cache.get("/") is None
    assert cache.get("/admin/profile") is None
    assert cache.get("/blog") == "blog"


def test_get_or_set_builds_once():
    cache = PageCache()
    calls = []

    def build():
        calls.append(1)
        return "value"

    assert cache.get_or_set("key", build) == "value"
    assert cache.get_or_set("key", build) == "value"
    assert len(calls) == 1


def test_invalidate_blog_includes_post_path():
    for path in ("/blog", "/admin/blog", "/blog/hello", "/blog/other"):
        page_cache.set(path, path)

    invalidate_blog("hello")

    assert not page_cache.is_cached("/blog")
    assert not page_cache.is_cached("/admin/blog")
    assert not page_cache.is_cached("/blog/hello")
    assert page_cache.is_cached("/blog/other")
