"""
Performance benchmarks for latency and throughput testing.
Measures normalizer performance on receipt-sized workloads.
"""
import time
import statistics

from product_normalizer import NormalizerSettings, ProductNormalizer

NAMES = [
    "VEREIA MLEKO 3.6% 1L",
    "Мляко прясно Верея био 3,6% 1 литър",
    "SIRENE BJALO BDS 400gr",
    "Хляб Добруджа бял 500 гр.",
    "Бира Загорка 6 x 500 мл",
    "Вода минерална Девин 1,5л 3800123456789",
    "Кашкавал Витоша 400г",
    "Xyzzy Plumbus 2 бр",
]


class TestParsingPerformance:
    """Benchmark parsing and normalization speed."""

    def test_single_name_latency(self):
        """Single name normalization should stay well under 5ms on average."""
        normalizer = ProductNormalizer(settings=NormalizerSettings())

        times = []
        for _ in range(50):
            start = time.perf_counter()
            normalizer.normalize(NAMES[1])
            times.append((time.perf_counter() - start) * 1000)

        avg_time = statistics.mean(times)
        print(f"\nSingle name: avg={avg_time:.3f}ms, max={max(times):.3f}ms")
        assert avg_time < 5

    def test_batch_throughput(self):
        """A 1000-line batch should finish in under two seconds."""
        normalizer = ProductNormalizer(settings=NormalizerSettings())
        batch = NAMES * 125

        start = time.perf_counter()
        normalized = normalizer.normalize_batch(batch)
        elapsed = time.perf_counter() - start

        print(f"\nBatch of {len(batch)}: {elapsed:.3f}s ({len(batch) / elapsed:.0f} names/s)")
        assert len(normalized) == len(batch)
        assert elapsed < 2


class TestMatchingPerformance:
    """Benchmark catalog matching."""

    def test_match_against_catalog(self):
        """Matching one product against 500 candidates should take under a second."""
        normalizer = ProductNormalizer(settings=NormalizerSettings())
        catalog = [
            {"id": i, "normalized_name": normalizer.normalize_product_name(normalizer.parse_product_name(name)),
             "keywords": [f"kw{i}"]}
            for i, name in enumerate(NAMES * 63)
        ]
        components = normalizer.parse_product_name("MLEKO VEREIA 3,6% 1L")

        start = time.perf_counter()
        result = normalizer.match_product(components, catalog)
        elapsed = time.perf_counter() - start

        print(f"\nMatched against {len(catalog)} candidates in {elapsed:.3f}s")
        assert result is not None
        assert elapsed < 1
