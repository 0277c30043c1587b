# -*- coding: utf-8 -*-
"""Test volatility and forecast bounds."""
import unittest
import numpy as np
import pandas as pd
from coviddash.tools.probabilistic import (
    relative_returns,
    calculate_volatility,
    volatility_bounds,
)


class TestVolatility(unittest.TestCase):
    def test_calculate_volatility(self):
        self.assertAlmostEqual(calculate_volatility([100, 110, 121]), 0.0)
        self.assertAlmostEqual(calculate_volatility([100, 200, 100]), 0.75)
        self.assertEqual(calculate_volatility([]), 0.0)
        self.assertEqual(calculate_volatility([5]), 0.0)

    def test_zero_denominator(self):
        returns = relative_returns([0, 10, 20])
        self.assertTrue(np.allclose(returns, [0.0, 1.0]))
        volatility = calculate_volatility([0, 10, 20])
        self.assertAlmostEqual(volatility, 0.5)
        self.assertTrue(np.isfinite(calculate_volatility([0, 0, 5, 0, 3])))

    def test_volatility_bounds(self):
        upper, lower = volatility_bounds(np.array([100.0, 200.0]), 0.5, interval_scale=0.3)
        self.assertTrue(np.allclose(lower, [85, 170]))
        self.assertTrue(np.allclose(upper, [115, 230]))

        upper, lower = volatility_bounds(np.array([100.0]), 0.0)
        self.assertEqual(upper[0], 100)
        self.assertEqual(lower[0], 100)

        upper, lower = volatility_bounds(np.array([100.0, 7.0]), 10.0)
        self.assertTrue((lower >= 0).all())
        self.assertTrue((upper >= np.array([100.0, 7.0])).all())

    def test_frame_bounds(self):
        forecast = pd.DataFrame(
            {'a': [10.0, 20.0], 'b': [100.0, 100.0]},
            index=pd.date_range("2023-01-01", periods=2, freq='D'),
        )
        upper, lower = volatility_bounds(forecast, np.array([0.0, 1.0]))
        self.assertIsInstance(upper, pd.DataFrame)
        self.assertTrue(upper.index.equals(forecast.index))
        self.assertTrue((upper['a'] == forecast['a']).all())
        self.assertTrue((lower['b'] == 70).all())
        self.assertTrue((upper['b'] == 130).all())
