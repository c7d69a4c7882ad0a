"""Tests for SLO session state."""

import pytest
from burncalc.config.settings import Settings
from burncalc.core.errors import ValidationError
from burncalc.slos.calculator import ErrorBudget
from burncalc.slos.session import CollectionFrequency, SloSession


@pytest.fixture
def session():
    return SloSession()


class TestDefaults:
    def test_initial_values(self, session):
        assert session.sli_description == ""
        assert session.slo == 99.9
        assert session.window_days == 30
        assert session.total_events == 1_000_000
        assert session.formatted_total_events == "1,000,000"
        assert session.collection_freq == CollectionFrequency.ONE_MINUTE

    def test_derived_values(self, session):
        assert session.eb_ratio == pytest.approx(0.001)
        assert session.allowed_failures == 1000

    def test_invalid_constructor_values_raise(self):
        with pytest.raises(ValidationError, match="at least 1 day"):
            SloSession(window_days=0)

    def test_from_settings(self):
        settings = Settings(slo=99.5, window_days=7, total_events=10_000, collection_freq="5m")

        session = SloSession.from_settings(settings)

        assert session.slo == 99.5
        assert session.window_days == 7
        assert session.allowed_failures == 50
        assert session.collection_freq == CollectionFrequency.FIVE_MINUTES


class TestSetSlo:
    def test_recalculates_budget(self, session):
        assert session.set_slo(99.0)

        assert session.slo == 99.0
        assert session.eb_ratio == pytest.approx(0.01)
        assert session.allowed_failures == 10_000

    def test_bounds_accepted(self, session):
        assert session.set_slo(100)
        assert session.allowed_failures == 0
        assert session.set_slo(0)
        assert session.eb_ratio == 1

    @pytest.mark.parametrize("value", [100.1, -1, float("nan")])
    def test_out_of_range_rejected(self, session, value):
        assert not session.set_slo(value)
        assert session.slo == 99.9


class TestSetWindowDays:
    def test_accepted(self, session):
        assert session.set_window_days(7)
        assert session.window_days == 7

    @pytest.mark.parametrize("value", [0, -30, 7.5, True])
    def test_rejected(self, session, value):
        result = session.set_window_days(value)

        assert not result.accepted
        assert session.window_days == 30


class TestSetTotalEvents:
    def test_recalculates_budget(self, session):
        assert session.set_total_events(500_000)

        assert session.formatted_total_events == "500,000"
        assert session.eb_ratio == pytest.approx(0.001)
        assert session.allowed_failures == 500

    def test_negative_rejected(self, session):
        assert not session.set_total_events(-1)
        assert session.total_events == 1_000_000

    def test_text_with_separators(self, session):
        assert session.set_total_events_text("2,500,000")
        assert session.total_events == 2_500_000

    def test_text_empty_means_zero(self, session):
        assert session.set_total_events_text("")
        assert session.total_events == 0

    @pytest.mark.parametrize("raw", ["abc", "12a", "-5", "1.5"])
    def test_text_rejected(self, session, raw):
        assert not session.set_total_events_text(raw)
        assert session.total_events == 1_000_000


class TestOtherInputs:
    def test_sli_description(self, session):
        session.set_sli_description("Proportion of successful requests")
        assert session.sli_description == "Proportion of successful requests"

    def test_collection_freq(self, session):
        assert session.set_collection_freq("5m")
        assert session.collection_freq == CollectionFrequency.FIVE_MINUTES

    def test_collection_freq_does_not_affect_budget(self, session):
        before = session.error_budget()
        session.set_collection_freq("10s")
        assert session.error_budget() == before

    def test_unknown_collection_freq_rejected(self, session):
        assert not session.set_collection_freq("2m")
        assert session.collection_freq == CollectionFrequency.ONE_MINUTE


class TestDerivedViews:
    def test_error_budget(self, session):
        budget = session.error_budget()

        assert isinstance(budget, ErrorBudget)
        assert budget.allowed_failures == 1000
        assert budget.window_days == 30

    def test_composition(self, session):
        good, budget = session.composition()

        assert good.name == "Good Events (SLO)"
        assert good.value == 99.9
        assert budget.name == "Error Budget"
        assert budget.value == pytest.approx(0.1)

    def test_to_dict(self, session):
        data = session.to_dict()

        assert data["collectionFreq"] == "1m"
        assert data["allowedFailures"] == 1000
