"""
Unit tests for conf.py: 通过 pytest-django 的 settings fixture 覆盖配置。
"""
import pytest
from django.core.exceptions import ImproperlyConfigured

from rxsafety import conf
from rxsafety.similarity import score_duplicate_candidate
from tests.conftest import PatientFactory


class TestDuplicateWeights:

    def test_defaults(self):
        assert conf.get_duplicate_weights() == conf.DEFAULT_DUPLICATE_WEIGHTS
        assert sum(conf.DEFAULT_DUPLICATE_WEIGHTS.values()) == 100

    def test_override_changes_score(self, settings):
        settings.RXSAFETY_DUPLICATE_WEIGHTS = {
            'name': 50, 'fiscal_code': 30, 'date_of_birth': 10, 'phone': 10,
        }
        a = PatientFactory()
        b = PatientFactory()

        assert score_duplicate_candidate(a, b) == 50 + 10

    def test_missing_key(self, settings):
        settings.RXSAFETY_DUPLICATE_WEIGHTS = {'name': 100}

        with pytest.raises(ImproperlyConfigured, match='missing keys'):
            conf.get_duplicate_weights()

    def test_must_sum_to_100(self, settings):
        settings.RXSAFETY_DUPLICATE_WEIGHTS = {
            'name': 60, 'fiscal_code': 30, 'date_of_birth': 12, 'phone': 8,
        }
        with pytest.raises(ImproperlyConfigured, match='sum to 100'):
            conf.get_duplicate_weights()

    def test_negative_weight(self, settings):
        settings.RXSAFETY_DUPLICATE_WEIGHTS = {
            'name': 110, 'fiscal_code': -10, 'date_of_birth': 0, 'phone': 0,
        }
        with pytest.raises(ImproperlyConfigured, match='negative'):
            conf.get_duplicate_weights()


class TestOtherSettings:

    def test_min_score_default(self):
        assert conf.get_duplicate_min_score() == 60

    def test_refill_window_default(self):
        assert conf.get_refill_due_window_days() == 7

    def test_refill_window_override(self, settings):
        settings.RXSAFETY_REFILL_DUE_WINDOW_DAYS = '3'
        assert conf.get_refill_due_window_days() == 3

    def test_refill_window_zero_allowed(self, settings):
        settings.RXSAFETY_REFILL_DUE_WINDOW_DAYS = 0
        assert conf.get_refill_due_window_days() == 0

    def test_refill_window_negative(self, settings):
        settings.RXSAFETY_REFILL_DUE_WINDOW_DAYS = -1

        with pytest.raises(ImproperlyConfigured, match='must not be negative'):
            conf.get_refill_due_window_days()

    def test_refill_window_not_integer(self, settings):
        settings.RXSAFETY_REFILL_DUE_WINDOW_DAYS = 'a week'

        with pytest.raises(ImproperlyConfigured, match='must be an integer'):
            conf.get_refill_due_window_days()
