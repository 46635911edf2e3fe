"""Example: Ranking forecasters on a synthetic seasonal series.

Builds a monthly-style series with a linear trend, a period-12 pattern and a
little noise, runs the analysis service once and prints the ranking.

Usage:
    python examples/run_analysis.py
"""

import numpy as np

from forecastrank.core.logging import configure_logging
from forecastrank.features.analysis import AnalysisConfig, AnalysisService


def main():
    configure_logging()

    # 1. Create a seasonal series with trend
    rng = np.random.default_rng(42)
    t = np.arange(72, dtype=np.float64)
    y = 100 + 0.5 * t + 10 * np.sin(2 * np.pi * t / 12) + rng.normal(0, 1, len(t))
    timestamps = [f"{2019 + i // 12}-{i % 12 + 1:02d}" for i in range(len(t))]
    print(f"Series: {len(y)} observations, {timestamps[0]} .. {timestamps[-1]}")

    # 2. Run the analysis
    service = AnalysisService()
    result = service.run(y, AnalysisConfig(train_ratio=0.8), timestamps=timestamps)

    # 3. Statistics and seasonality
    stats = result.statistics
    print(f"\nMean={stats.mean:.2f}  Std={stats.std:.2f}  Median={stats.median:.2f}")
    print(f"Detected period: {result.seasonality.period}")
    print(f"Split: train={result.train_size}, test={result.test_size}")

    # 4. Ranking
    print("\nRanking (by test RMSE):")
    for rank, name, rmse in result.summary():
        rmse_text = f"{rmse:.3f}" if rmse is not None else "undefined"
        print(f"  {rank}. {name:<30} RMSE={rmse_text}")

    for skipped in result.skipped_models:
        print(f"  - skipped {skipped.name}: {skipped.reason}")

    # 5. Residuals of the best model
    residuals = np.asarray(result.residuals)
    print(f"\nBest model: {result.best_model.name}")
    print(f"Residual mean={residuals.mean():.3f}, max |residual|={np.abs(residuals).max():.3f}")

    for warning in result.warnings:
        print(f"Warning: {warning}")


if __name__ == "__main__":
    main()
