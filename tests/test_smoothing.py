# -*- coding: utf-8 -*-
"""Test the trend and seasonal smoothing forecaster."""
import unittest
import numpy as np
import pandas as pd
from coviddash.models.smoothing import (
    smoothing_parameters,
    double_exponential_smoothing,
    smoothed_projection,
    trend_seasonal_forecast,
    TrendSeasonalSmoothing,
)
from coviddash.models.base import PredictionObject


class TestSmoothingFunctions(unittest.TestCase):
    def test_smoothing_parameters(self):
        alpha, beta = smoothing_parameters(0.0)
        self.assertAlmostEqual(alpha, 0.1)
        self.assertAlmostEqual(beta, 0.05)
        alpha, beta = smoothing_parameters(1.0)
        self.assertAlmostEqual(alpha, 0.3)
        self.assertAlmostEqual(beta, 0.15)
        alpha, beta = smoothing_parameters(0.1)
        self.assertAlmostEqual(alpha, 0.15)
        self.assertAlmostEqual(beta, 0.08)

    def test_double_exponential_smoothing(self):
        level, trend = double_exponential_smoothing(np.array([5.0, 5.0, 5.0]), 0.3, 0.1)
        self.assertAlmostEqual(level, 5.0)
        self.assertAlmostEqual(trend, 0.0)
        level, trend = double_exponential_smoothing(np.linspace(0, 1, 10), 0.3, 0.1)
        self.assertTrue(trend > 0)

    def test_small_input(self):
        self.assertTrue(np.array_equal(trend_seasonal_forecast([], 4), np.zeros(4)))
        self.assertTrue(np.array_equal(trend_seasonal_forecast([7], 3), [7, 7, 7]))
        self.assertTrue(np.array_equal(trend_seasonal_forecast([3, 9], 2), [9, 9]))

    def test_steady_growth(self):
        history = [100, 110, 120, 130, 140, 150, 160, 170, 180, 190]
        forecast = trend_seasonal_forecast(history, 5)
        self.assertEqual(forecast.shape, (5,))
        self.assertTrue(np.isfinite(forecast).all())
        self.assertTrue((forecast > 0).all())
        self.assertTrue((forecast >= min(history)).all())
        self.assertTrue(
            np.allclose(forecast, [138.36, 134.25, 138.63, 138.28, 134.16], atol=0.1)
        )
        # repeatable
        self.assertTrue(np.array_equal(forecast, trend_seasonal_forecast(history, 5)))

    def test_zero_seasonal_position(self):
        forecast = trend_seasonal_forecast([1, 5, 5, 1, 5, 5, 1, 5, 5], 6)
        self.assertEqual(forecast.shape, (6,))
        self.assertTrue(forecast.max() > 1)
        self.assertGreater(np.unique(np.round(forecast, 6)).size, 1)

    def test_step_change_limit(self):
        volatility = 0.05
        predictions = smoothed_projection(
            np.linspace(0, 1, 20), 15, volatility
        )
        max_change = volatility * 2 + 0.1
        self.assertTrue((predictions >= 0).all())
        previous = predictions[:-1]
        nonzero = previous != 0
        changes = np.abs(np.diff(predictions)[nonzero] / previous[nonzero])
        self.assertTrue((changes <= max_change + 1e-9).all())


class TestTrendSeasonalSmoothing(unittest.TestCase):
    def setUp(self):
        self.df = pd.DataFrame(
            {
                'cases': np.arange(100, 200, 10, dtype=float),
                'deaths': [2, 2, 3, 3, 4, 4, 5, 5, 6, 6],
                'vaccinated': [50, 50, 50, 50, 50, 50, 50, 50, 50, 50],
            },
            index=pd.date_range("2023-03-01", periods=10, freq='D', name='date'),
        )

    def test_matches_sequence_forecast(self):
        model = TrendSeasonalSmoothing()
        forecast = model.fit(self.df).predict(5, just_point_forecast=True)
        for col in self.df.columns:
            self.assertTrue(
                np.allclose(
                    forecast[col].to_numpy(), trend_seasonal_forecast(self.df[col], 5)
                ),
                msg=col,
            )
        self.assertTrue(np.allclose(forecast['vaccinated'], 50))

    def test_prediction_object(self):
        prediction = TrendSeasonalSmoothing(interval_scale=0.3).fit(self.df).predict(5)
        self.assertIsInstance(prediction, PredictionObject)
        self.assertTrue(prediction)
        self.assertEqual(prediction.forecast.shape, (5, 3))
        self.assertEqual(prediction.forecast.index[0], pd.Timestamp("2023-03-11"))
        self.assertTrue((prediction.lower_forecast <= prediction.forecast).all().all())
        self.assertTrue((prediction.forecast <= prediction.upper_forecast).all().all())
        self.assertTrue((prediction.lower_forecast >= 0).all().all())
        self.assertEqual(prediction.model_parameters['history_window'], 60)
        self.assertAlmostEqual(prediction.volatility['vaccinated'], 0.0)

        long_form = prediction.long_form_results()
        self.assertEqual(long_form.shape[0], 5 * 3 * 3)
        self.assertEqual(
            set(long_form['PredictionInterval']), {'point', 'upper', 'lower'}
        )
        copied = prediction.copy()
        copied.forecast.iloc[0, 0] = -1
        self.assertNotEqual(prediction.forecast.iloc[0, 0], -1)

    def test_history_window(self):
        long_df = pd.concat(
            [self.df * 0 + 1000, self.df],
        )
        long_df.index = pd.date_range("2023-02-19", periods=20, freq='D', name='date')
        model = TrendSeasonalSmoothing(history_window=10).fit(long_df)
        self.assertEqual(model.df_train.shape[0], 10)
        forecast = model.predict(5, just_point_forecast=True)
        self.assertTrue(
            np.allclose(forecast['cases'], trend_seasonal_forecast(self.df['cases'], 5))
        )

    def test_short_history(self):
        model = TrendSeasonalSmoothing().fit(self.df.head(2))
        forecast = model.predict(4, just_point_forecast=True)
        self.assertEqual(forecast.shape, (4, 3))
        self.assertTrue((forecast['cases'] == 110).all())

    def test_invalid_window(self):
        with self.assertRaises(ValueError):
            TrendSeasonalSmoothing(history_window=0)

    def test_params(self):
        model = TrendSeasonalSmoothing(history_window=30, max_period=7)
        self.assertEqual(
            model.get_params(),
            {'history_window': 30, 'interval_scale': 0.3, 'max_period': 7},
        )
        # deterministic model, nothing seeded
        self.assertFalse(hasattr(model, 'random_seed'))
