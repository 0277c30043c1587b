# -*- coding: utf-8 -*-
"""Test synthetic history generation."""
import unittest
import numpy as np
import pandas as pd
from coviddash.datasets.synthetic import (
    SyntheticHistoryGenerator,
    generate_synthetic_history,
    COUNTRY_MULTIPLIERS,
    LEVEL_PARAMS,
)
from coviddash.tools.shaping import SERIES_COLUMNS


class TestSyntheticHistoryGenerator(unittest.TestCase):
    def test_global_history(self):
        generator = SyntheticHistoryGenerator(start_date='2023-01-01', n_days=365, random_seed=2023)
        history = generator.global_history()
        self.assertEqual(history.shape, (365, 4))
        self.assertEqual(list(history.columns), SERIES_COLUMNS)
        self.assertEqual(history.index[0], pd.Timestamp('2023-01-01'))
        self.assertEqual(history.index.name, 'date')
        # cumulative counts never decrease
        self.assertTrue((history.diff().dropna() >= 0).all().all())
        self.assertTrue(history['cases'].iloc[0] >= 500000)
        self.assertTrue(history['cases'].iloc[-1] > history['cases'].iloc[0])

    def test_reproducible(self):
        first = generate_synthetic_history('country', name='India', n_days=60, random_seed=7)
        second = generate_synthetic_history('country', name='India', n_days=60, random_seed=7)
        pd.testing.assert_frame_equal(first, second)
        third = generate_synthetic_history('country', name='India', n_days=60, random_seed=8)
        self.assertFalse(first.equals(third))

    def test_shared_random_state(self):
        generator = SyntheticHistoryGenerator(n_days=30, random_seed=np.random.RandomState(5))
        first = generator.state_history('Kerala')
        second = generator.state_history('Kerala')
        self.assertFalse(first.equals(second))

    def test_multipliers(self):
        generator = SyntheticHistoryGenerator(n_days=30)
        united_states = generator.country_history('United States')
        unknown = generator.country_history('Atlantis')
        self.assertTrue(united_states['cases'].iloc[0] > unknown['cases'].iloc[0])
        self.assertTrue(unknown['cases'].iloc[0] < 6000)
        state = generate_synthetic_history('state', name='Kerala', n_days=30)
        self.assertEqual(state.shape, (30, 4))
        self.assertTrue(state['cases'].iloc[0] < 1000)

    def test_errors(self):
        with self.assertRaises(ValueError):
            SyntheticHistoryGenerator(n_days=0)
        with self.assertRaises(ValueError):
            SyntheticHistoryGenerator(n_days=10).generate(level='continent')
        with self.assertRaises(TypeError):
            COUNTRY_MULTIPLIERS['Atlantis'] = 1.0
        with self.assertRaises(TypeError):
            LEVEL_PARAMS['global']['cases'] = 1
