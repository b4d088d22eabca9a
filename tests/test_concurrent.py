"""Tests that the datastore stays consistent under concurrent callers.

Each test starts its worker threads behind a barrier so the operations
really overlap, then checks the results and the cross-index invariants.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from shortener.core.exceptions import CodeInUseError
from shortener.db.memory_store import InMemoryUrlDatastore

TEST_URL = "https://www.adroit-tt.com"


def run_concurrently(func, count, workers=16):
    """Call func(i) for i in range(count) from a thread pool, released together."""
    barrier = threading.Barrier(min(count, workers))

    def task(i):
        if i < barrier.parties:
            barrier.wait()
        return func(i)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(task, range(count)))


def assert_consistent(snapshot):
    mapping = snapshot.short_to_long_url_map
    reverse = snapshot.long_to_short_url_map
    assert set(mapping) == set(snapshot.short_url_click_count_map)
    assert all(reverse.values())
    reverse_codes = sorted(code for codes in reverse.values() for code in codes)
    assert reverse_codes == sorted(mapping)
    for url, codes in reverse.items():
        assert all(mapping[code] == url for code in codes)


class TestConcurrentDatastore:
    """Prove composite operations are atomic under threads."""

    def test_concurrent_create_same_url(self, datastore):
        """100 simultaneous creates for one URL give 100 distinct, resolvable codes."""
        codes = run_concurrently(lambda _: datastore.create_code(TEST_URL), 100)

        assert len(set(codes)) == 100, "All codes must be unique under concurrency"
        assert len(datastore.codes_for_url(TEST_URL)) == 100
        for code in codes:
            assert datastore.resolve(code) == TEST_URL
        assert_consistent(datastore.export_snapshot())

    def test_concurrent_resolves_count_every_click(self, datastore):
        """No increment is lost when many threads resolve one code."""
        code = datastore.create_code(TEST_URL)

        results = run_concurrently(lambda _: datastore.resolve(code), 1000, workers=32)

        assert results == [TEST_URL] * 1000
        assert datastore.get_click_count(code) == 1000

    def test_concurrent_custom_code_claim(self, datastore):
        """Exactly one of many threads claiming one custom code wins."""
        def claim(i):
            try:
                datastore.create_code(f"https://example.com/{i}", "abcd1234")
                return True
            except CodeInUseError:
                return False

        outcomes = run_concurrently(claim, 50)

        assert outcomes.count(True) == 1
        assert len(datastore) == 1
        assert_consistent(datastore.export_snapshot())

    def test_concurrent_deletes_of_one_code(self, datastore):
        """Only one delete of a code reports success."""
        code = datastore.create_code(TEST_URL)

        outcomes = run_concurrently(lambda _: datastore.delete_code(code), 40)

        assert outcomes.count(True) == 1
        assert datastore.codes_for_url(TEST_URL) == []

    def test_readers_never_see_partial_mutations(self, datastore):
        """Snapshots taken during create/delete churn always satisfy the invariants."""
        stop = threading.Event()
        errors = []

        def writer(i):
            url = f"https://example.com/{i % 5}"
            while not stop.is_set():
                code = datastore.create_code(url)
                datastore.resolve(code)
                if i % 2:
                    datastore.delete_code(code)
                else:
                    datastore.delete_all_codes_for_url(url)

        def reader():
            try:
                for _ in range(200):
                    assert_consistent(datastore.export_snapshot())
            except AssertionError as e:
                errors.append(e)
            finally:
                stop.set()

        threads = [threading.Thread(target=writer, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        reader()
        for thread in threads:
            thread.join()

        assert not errors, f"Observed inconsistent state: {errors[0]}"
        assert_consistent(datastore.export_snapshot())

    def test_concurrent_mixed_operations(self, datastore, sample_urls):
        """Interleaved creates, resolves and bulk deletes leave consistent indexes."""
        def work(i):
            url = sample_urls[i % len(sample_urls)]
            code = datastore.create_code(url)
            datastore.resolve(code)
            if i % 10 == 0:
                datastore.delete_all_codes_for_url(url)
            return code

        run_concurrently(work, 300)

        snapshot = datastore.export_snapshot()
        assert_consistent(snapshot)
        for code, count in snapshot.short_url_click_count_map.items():
            assert count == 1, f"Code {code} should have exactly one click"

    def test_readers_never_see_partial_import(self, datastore, code_generator):
        """Readers see one whole snapshot or the other while imports alternate."""
        first = InMemoryUrlDatastore(code_generator=code_generator)
        for _ in range(50):
            first.create_code("https://example.com/first")
        second = InMemoryUrlDatastore(code_generator=code_generator)
        for i in range(30):
            second.create_code(f"https://example.com/second/{i % 3}")
        snapshots = [first.export_snapshot(), second.export_snapshot()]
        expected_codes = [set(s.short_to_long_url_map) for s in snapshots]
        datastore.import_snapshot(snapshots[0])

        stop = threading.Event()
        errors = []

        def importer(i):
            n = i
            while not stop.is_set():
                datastore.import_snapshot(snapshots[n % 2])
                n += 1

        def reader():
            try:
                for _ in range(300):
                    snapshot = datastore.export_snapshot()
                    assert_consistent(snapshot)
                    assert set(snapshot.short_to_long_url_map) in expected_codes, "Saw a mix of snapshots"
                    assert len(datastore) in (50, 30), "Saw an empty or partially filled store"
            except AssertionError as e:
                errors.append(e)
            finally:
                stop.set()

        threads = [threading.Thread(target=importer, args=(i,)) for i in range(4)]
        for thread in threads:
            thread.start()
        reader()
        for thread in threads:
            thread.join()

        assert not errors, f"Observed torn import: {errors[0]}"
        assert_consistent(datastore.export_snapshot())
        assert set(datastore.export_snapshot().short_to_long_url_map) in expected_codes
