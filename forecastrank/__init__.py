"""ForecastRank: univariate forecasting model evaluation and ranking."""
