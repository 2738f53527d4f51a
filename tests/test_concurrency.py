"""
Concurrent access to the registry from many threads.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from shortlinks.exceptions import LimitExceededError, LinkNotFoundError


def attempt(registry, code):
    try:
        return registry.resolve(code)
    except LimitExceededError:
        return "limit"


class TestConcurrentResolve:

    @pytest.mark.parametrize("limit,callers", [(1, 20), (10, 64), (50, 200)])
    def test_exactly_limit_successes(self, registry, limit, callers):
        """M parallel callers against limit N: N succeed, M - N fail"""
        link = registry.create("https://a.com", "U1", click_limit=limit)

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: attempt(registry, link.short_code), range(callers)))

        assert results.count("https://a.com") == limit
        assert results.count("limit") == callers - limit
        assert link.clicks_count == limit
        assert link.active is False

    def test_unrelated_code_not_blocked(self, registry):
        """Holding one link's lock does not stall resolution of another"""
        busy = registry.create("https://busy.com", "U1")
        free = registry.create("https://free.com", "U1")

        with busy.lock:
            with ThreadPoolExecutor(max_workers=1) as pool:
                future = pool.submit(registry.resolve, free.short_code)
                assert future.result(timeout=2) == "https://free.com"


class TestConcurrentMutation:

    def test_concurrent_create_same_pair_yields_one_record(self, registry):
        with ThreadPoolExecutor(max_workers=16) as pool:
            links = list(pool.map(lambda _: registry.create("https://a.com", "U1"), range(100)))

        assert len({id(link) for link in links}) == 1
        assert len(registry) == 1
        assert registry.generator.outstanding_count == 1

    def test_concurrent_create_distinct_owners(self, registry):
        owners = [f"user-{i}" for i in range(200)]
        with ThreadPoolExecutor(max_workers=16) as pool:
            links = list(pool.map(lambda owner: registry.create("https://a.com", owner), owners))

        assert len({link.short_code for link in links}) == 200
        for owner, link in zip(owners, links):
            assert registry.list_by_owner(owner) == [link]

    def test_delete_races_with_resolve(self, registry):
        link = registry.create("https://a.com", "U1", click_limit=1000)

        def click(_):
            try:
                return registry.resolve(link.short_code)
            except LinkNotFoundError:
                return "gone"

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(click, i) for i in range(200)]
            deleted = pool.submit(registry.delete, link.short_code, "U1")
            results = [f.result() for f in futures]

        assert deleted.result() is True
        successes = results.count("https://a.com")
        assert successes == link.clicks_count
        assert successes + results.count("gone") == 200
        with pytest.raises(LinkNotFoundError):
            registry.resolve(link.short_code)

    def test_sweep_and_delete_remove_once(self, registry, clock):
        links = [registry.create(f"https://site{i}.com", "U1") for i in range(100)]
        clock.advance(days=2)

        with ThreadPoolExecutor(max_workers=4) as pool:
            sweep = pool.submit(registry.sweep_expired)
            deletions = list(pool.map(lambda l: registry.delete(l.short_code, "U1"), links))

        swept = sweep.result()
        assert len(swept) + deletions.count(True) == 100
        assert len(registry) == 0
        assert registry.list_by_owner("U1") == []
        assert registry.generator.outstanding_count == 0

    def test_sweep_while_creating(self, registry, clock):
        old = [registry.create(f"https://old{i}.com", "U1") for i in range(50)]
        clock.advance(days=2)

        with ThreadPoolExecutor(max_workers=4) as pool:
            sweep = pool.submit(registry.sweep_expired)
            fresh = list(pool.map(lambda i: registry.create(f"https://new{i}.com", "U2"), range(50)))

        assert sorted(l.short_code for l in sweep.result()) == sorted(l.short_code for l in old)
        assert {l.short_code for l in registry.list_by_owner("U2")} == {l.short_code for l in fresh}
        assert len(registry) == 50
