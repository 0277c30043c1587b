# -*- coding: utf-8 -*-
"""Test uploaded and demo data loading."""
import io
import unittest
import pandas as pd
from coviddash.datasets import records_from_df, load_csv, load_demo
from coviddash.tools.shaping import RECORD_COLUMNS


class TestRecordsFromDf(unittest.TestCase):
    def test_aliases(self):
        upload = pd.DataFrame(
            {
                'Country': ['India', 'Canada', ''],
                'totalCases': [0, 5, 3],
                'cases': [100, 7, 4],
                'lat': [1.5, 0, 2],
                'Date': ['2023-01-02', None, '2023-01-03'],
                'people_vaccinated': [9, 8, 7],
            }
        )
        with self.assertWarns(UserWarning):
            records = records_from_df(upload)
        self.assertEqual(list(records.columns), RECORD_COLUMNS)
        self.assertEqual(records['country'].tolist(), ['India', 'Canada'])
        # a zero in an earlier alias falls through to the next
        self.assertEqual(records['total_cases'].tolist(), [100, 5])
        self.assertEqual(records['vaccinated'].tolist(), [9, 8])
        self.assertEqual(records['latitude'].tolist(), [1.5, 0.0])
        self.assertEqual(records['date'].iloc[0], pd.Timestamp('2023-01-02'))
        self.assertEqual(
            records['date'].iloc[1].normalize(), pd.Timestamp.today().normalize()
        )

    def test_first_alias_wins(self):
        upload = pd.DataFrame(
            {'location': ['Spain'], 'country': ['France'], 'region': ['Paris']}
        )
        records = records_from_df(upload)
        self.assertEqual(records['country'].iloc[0], 'France')
        self.assertEqual(records['state'].iloc[0], 'Paris')


class TestLoadCsv(unittest.TestCase):
    def test_load_csv(self):
        text = "location,total_cases,deaths,date\nIndia,100,2,2023-01-01\nIndia,110,3,2023-01-02\n"
        records = load_csv(io.StringIO(text))
        self.assertEqual(records.shape[0], 2)
        self.assertEqual(records['total_cases'].sum(), 210)
        self.assertEqual(records['deaths'].tolist(), [2, 3])

    def test_no_valid_rows(self):
        with self.assertRaises(ValueError):
            with self.assertWarns(UserWarning):
                load_csv(io.StringIO("foo,bar\n1,2\n"))


class TestLoadDemo(unittest.TestCase):
    def test_load_demo(self):
        records = load_demo(n_days=28)
        self.assertEqual(list(records.columns), RECORD_COLUMNS)
        self.assertEqual(records['country'].nunique(), 10)
        self.assertEqual(records.shape[0], 28 * (8 + 7 + 8))
        self.assertEqual(
            records.loc[records['country'] == 'United States', 'state'].nunique(), 8
        )
        self.assertTrue(records.loc[records['country'] == 'Canada', 'state'].isna().all())
        self.assertTrue((records['active_cases'] >= 0).all())
        pd.testing.assert_frame_equal(records, load_demo(n_days=28))
