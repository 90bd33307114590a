from datetime import datetime, timedelta, timezone

import pytest

from dispatch.candidate_filter import filter_eligible_travels
from dispatch.matcher import NO_MATCH_MESSAGE, evaluate_passenger_assignment, find_matching_travels
from drivers.models import TravelOffer, TravelStatus
from rides.insertion.policy import RouteEvaluationOptions
from rides.models import Coordinate, PassengerStops
from routing.route_service import InvalidCoordinateError

NOW = datetime(2026, 10, 19, 8, 0)


@pytest.fixture
def options():
    return RouteEvaluationOptions(max_additional_minutes=30, max_deviation_meters=5000, average_speed_kmh=60)


@pytest.fixture
def passenger():
    return PassengerStops(pickup=Coordinate(0, 0.3), dropoff=Coordinate(0, 0.7))


def make_travel(travel_id, start=(0, 0), end=(0, 1), minutes_from_now=30, **kwargs):
    kwargs.setdefault("status", TravelStatus.CONFIRMED)
    kwargs.setdefault("spaces_available", 2)
    return TravelOffer.new(
        travel_id=travel_id,
        driver_id=kwargs.pop("driver_id", f"driver-{travel_id}"),
        start=start,
        end=end,
        start_time=NOW + timedelta(minutes=minutes_from_now),
        **kwargs,
    )


def test_filter_applies_hard_rules():
    travels = [
        make_travel("ok-late", minutes_from_now=60),
        make_travel("ok-early", minutes_from_now=10),
        make_travel("pending", status="pending"),
        make_travel("cancelled", status=TravelStatus.CANCELLED),
        make_travel("full", spaces_available=0),
        make_travel("own-trip", driver_id="passenger-1"),
        make_travel("departed", minutes_from_now=-5),
    ]

    eligible = filter_eligible_travels(travels, passenger_id="passenger-1", now=NOW)

    # 1. only confirmed, not full, not own, upcoming
    # 2. earliest departure first
    assert [t.id for t in eligible] == ["ok-early", "ok-late"]


def test_filter_time_window_around_pickup():
    travels = [
        make_travel("too-early", minutes_from_now=-120),
        make_travel("inside-before", minutes_from_now=-60),
        make_travel("inside-after", minutes_from_now=80),
        make_travel("too-late", minutes_from_now=200),
    ]

    eligible = filter_eligible_travels(travels, pickup_time=NOW, time_window_minutes=90)

    assert [t.id for t in eligible] == ["inside-before", "inside-after"]


def test_evaluate_assignment_success(options, passenger):
    travel = make_travel("t1")

    evaluation = evaluate_passenger_assignment(travel, passenger, options)

    assert evaluation.success
    assert evaluation.message is None
    assert evaluation.original_route == (Coordinate(0, 0), Coordinate(0, 1))
    assert evaluation.updated_route == (Coordinate(0, 0), Coordinate(0, 0.3), Coordinate(0, 0.7), Coordinate(0, 1))
    assert evaluation.summary.additional_minutes == pytest.approx(0, abs=1e-6)
    assert evaluation.base_metrics == evaluation.candidate.base_metrics


def test_evaluate_assignment_uses_stored_route(options, passenger):
    stored = [{"lat": 0, "lng": 0.5}, {"lat": 0.2, "lng": 0.6}]
    travel = make_travel("t1", stored_route=stored)

    evaluation = evaluate_passenger_assignment(travel, passenger, options)

    assert evaluation.original_route == (
        Coordinate(0, 0),
        Coordinate(0, 0.5),
        Coordinate(0.2, 0.6),
        Coordinate(0, 1),
    )


def test_evaluate_assignment_no_match_is_not_an_error(options):
    travel = make_travel("t1")
    far_away = PassengerStops(pickup=Coordinate(1, 0.3), dropoff=Coordinate(1, 0.7))

    evaluation = evaluate_passenger_assignment(travel, far_away, options)

    assert not evaluation.success
    assert evaluation.candidate is None
    assert evaluation.updated_route is None
    assert evaluation.message == NO_MATCH_MESSAGE
    assert evaluation.base_metrics.total_distance_km > 0


def test_evaluate_assignment_rejects_invalid_passenger(options):
    with pytest.raises(InvalidCoordinateError):
        evaluate_passenger_assignment(make_travel("t1"), PassengerStops(Coordinate(95, 0), Coordinate(0, 0)), options)


def test_find_matching_ranks_by_added_time_then_price(options, passenger):
    travels = [
        # passenger stops are 0.05 deg (~5.6 km) off this trip's line
        make_travel("detour", start=(0.05, 0), end=(0.05, 1), price=1),
        make_travel("direct-expensive", price=5),
        make_travel("direct-cheap", price=3),
        make_travel("unrelated", start=(10, 10), end=(10, 11), price=1),
    ]
    wide = RouteEvaluationOptions(max_additional_minutes=30, max_deviation_meters=20000, average_speed_kmh=60)

    result = find_matching_travels(travels, passenger, wide, now=NOW)

    assert [m.travel.id for m in result.matches] == ["direct-cheap", "direct-expensive", "detour"]
    assert result.count == 3
    assert result.total_candidates == 3
    assert result.applied_config["max_deviation_meters"] == 20000
    assert result.applied_config["pickup_time"] is None


def test_find_matching_truncates_results(options, passenger):
    travels = [make_travel(f"t{i}", minutes_from_now=10 + i) for i in range(6)]

    result = find_matching_travels(travels, passenger, options, now=NOW, max_results=2)

    assert result.count == 2
    assert result.total_candidates == 6
    assert result.applied_config["max_results"] == 2


def test_find_matching_skips_unusable_routes(options, passenger, caplog):
    broken = make_travel("broken", start=(0, 0), end=(0, 0))
    travels = [broken, make_travel("ok")]

    result = find_matching_travels(travels, passenger, options, now=NOW)

    assert [m.travel.id for m in result.matches] == ["ok"]
    assert "broken" in caplog.text


def test_find_matching_without_candidates(options, passenger):
    result = find_matching_travels([], passenger, options, now=NOW, max_results=0)

    assert result.matches == []
    assert result.count == 0
    assert result.applied_config["max_results"] == 1


def test_filter_accepts_timezone_aware_start_times():
    now_utc = datetime.now(timezone.utc)
    travels = [
        TravelOffer.new("upcoming", "d1", (0, 0), (0, 1), now_utc + timedelta(minutes=30), status="confirmed"),
        TravelOffer.new("departed", "d2", (0, 0), (0, 1), now_utc - timedelta(minutes=30), status="confirmed"),
    ]

    # no explicit now: "upcoming" is judged in each trip's own timezone
    eligible = filter_eligible_travels(travels)

    assert [t.id for t in eligible] == ["upcoming"]


def test_evaluate_assignment_rejects_out_of_range_trip_route(options, passenger):
    travel = TravelOffer(
        id="bad",
        driver_id="d1",
        start=Coordinate(0, 0),
        end=Coordinate(0, 1),
        start_time=NOW + timedelta(minutes=30),
        status=TravelStatus.CONFIRMED,
        route_waypoints=(Coordinate(95, 0.5), Coordinate(0, 0.9)),
    )

    with pytest.raises(InvalidCoordinateError):
        evaluate_passenger_assignment(travel, passenger, options)


def test_find_matching_skips_trip_with_out_of_range_route(options, passenger, caplog):
    bad = TravelOffer(
        id="bad",
        driver_id="d1",
        start=Coordinate(0, 0),
        end=Coordinate(0, 1),
        start_time=NOW + timedelta(minutes=20),
        price=1,
        spaces_available=2,
        status=TravelStatus.CONFIRMED,
        route_waypoints=(Coordinate(95, 0.5), Coordinate(0, 0.9)),
    )
    travels = [bad, make_travel("ok", price=5)]

    result = find_matching_travels(travels, passenger, options, now=NOW)

    # 1. the bad record is dropped, the search still answers
    # 2. the skip is logged with the trip id
    assert [m.travel.id for m in result.matches] == ["ok"]
    assert "bad" in caplog.text
    assert "latitude" in caplog.text
