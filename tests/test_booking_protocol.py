"""
Tests for the seat-counting protocol: the counter always matches the booked
travelers, a full trip rejects bookings, and rejected calls leave the trip
untouched.
"""
import pytest

from tripbook.crud.trip import get_trip
from tripbook.exceptions import CapacityError, NotFoundError, StateError
from tripbook.services.booking import book_trip, cancel_booking

from conftest import TestingSessionLocal, booking_rows, make_trip, make_user


def snapshot(db, trip_id):
    db.expire_all()
    rows = booking_rows(db, trip_id)
    trip = get_trip(db, trip_id)
    return trip.current_bookings, [row.user_id for row in rows]


def test_book_adds_traveler_and_increments_counter(db, sample_trip, traveler):
    trip = book_trip(db, sample_trip.id, traveler.id)

    assert trip.current_bookings == 1
    assert trip.booked_by_ids == [traveler.id]
    assert trip.available_spots == 1
    assert trip.is_full is False


def test_counter_equals_booked_set_after_every_step(
    db, sample_trip, traveler, other_traveler
):
    book_trip(db, sample_trip.id, traveler.id)
    book_trip(db, sample_trip.id, other_traveler.id)
    cancel_booking(db, sample_trip.id, traveler.id)

    counter, booked = snapshot(db, sample_trip.id)
    assert counter == len(booked) == 1
    assert booked == [other_traveler.id]


def test_booked_travelers_keep_booking_order(db, creator, traveler, other_traveler):
    trip = make_trip(db, creator, max_capacity=3)

    book_trip(db, trip.id, other_traveler.id)
    book_trip(db, trip.id, traveler.id)
    trip = book_trip(db, trip.id, creator.id)

    assert trip.booked_by_ids == [other_traveler.id, traveler.id, creator.id]


def test_booking_full_trip_fails_and_leaves_state_unchanged(
    db, creator, traveler, other_traveler
):
    trip = make_trip(db, creator, max_capacity=1)
    book_trip(db, trip.id, traveler.id)
    before = snapshot(db, trip.id)

    with pytest.raises(CapacityError) as exc_info:
        book_trip(db, trip.id, other_traveler.id)

    assert exc_info.value.message == "Trip is already full"
    assert snapshot(db, trip.id) == before


def test_full_trip_is_reported_before_duplicate_booking(db, creator, traveler):
    trip = make_trip(db, creator, max_capacity=1)
    book_trip(db, trip.id, traveler.id)

    with pytest.raises(CapacityError):
        book_trip(db, trip.id, traveler.id)


def test_double_booking_fails_and_leaves_state_unchanged(db, sample_trip, traveler):
    book_trip(db, sample_trip.id, traveler.id)
    before = snapshot(db, sample_trip.id)

    with pytest.raises(StateError) as exc_info:
        book_trip(db, sample_trip.id, traveler.id)

    assert exc_info.value.message == "You have already booked this trip"
    # The counter increment was rolled back with the rejected insert
    assert snapshot(db, sample_trip.id) == before
    assert before == (1, [traveler.id])


def test_cancel_without_booking_fails_and_leaves_state_unchanged(
    db, sample_trip, traveler, other_traveler
):
    book_trip(db, sample_trip.id, traveler.id)
    before = snapshot(db, sample_trip.id)

    with pytest.raises(StateError) as exc_info:
        cancel_booking(db, sample_trip.id, other_traveler.id)

    assert exc_info.value.message == "You have not booked this trip"
    assert snapshot(db, sample_trip.id) == before


def test_book_then_cancel_restores_previous_state(
    db, sample_trip, traveler, other_traveler
):
    book_trip(db, sample_trip.id, other_traveler.id)
    before = snapshot(db, sample_trip.id)

    book_trip(db, sample_trip.id, traveler.id)
    cancel_booking(db, sample_trip.id, traveler.id)

    assert snapshot(db, sample_trip.id) == before


def test_single_seat_scenario(db, creator, traveler, other_traveler):
    """
    Test: capacity 1 -> A books, B is rejected, A cancels, B books
    """
    trip = make_trip(db, creator, max_capacity=1)

    trip = book_trip(db, trip.id, traveler.id)
    assert trip.current_bookings == 1

    with pytest.raises(CapacityError) as exc_info:
        book_trip(db, trip.id, other_traveler.id)
    assert "Trip is already full" in exc_info.value.message

    trip = cancel_booking(db, trip.id, traveler.id)
    assert trip.current_bookings == 0
    assert trip.booked_by_ids == []

    trip = book_trip(db, trip.id, other_traveler.id)
    assert trip.current_bookings == 1
    assert trip.booked_by_ids == [other_traveler.id]


def test_unknown_trip_raises_not_found(db, traveler):
    with pytest.raises(NotFoundError):
        book_trip(db, 9999, traveler.id)

    with pytest.raises(NotFoundError):
        cancel_booking(db, 9999, traveler.id)


def test_capacity_is_checked_against_stored_state_not_loaded_object(
    db, creator, traveler, other_traveler
):
    """
    Test: a trip object read while a seat was still free does not let a second
    booking through once another request has taken the seat
    """
    trip = make_trip(db, creator, max_capacity=1)
    stale = get_trip(db, trip.id)
    assert stale.is_full is False

    # Another request books the last seat through its own session
    other_session = TestingSessionLocal()
    try:
        book_trip(other_session, trip.id, traveler.id)
    finally:
        other_session.close()

    with pytest.raises(CapacityError):
        book_trip(db, trip.id, other_traveler.id)

    counter, booked = snapshot(db, trip.id)
    assert counter == 1
    assert booked == [traveler.id]


def test_creator_may_book_own_trip(db, sample_trip, creator):
    trip = book_trip(db, sample_trip.id, creator.id)

    assert trip.booked_by_ids == [creator.id]


def test_many_travelers_fill_trip_exactly(db, creator):
    trip = make_trip(db, creator, max_capacity=3)
    travelers = [make_user(db, f"student{i}@college.edu") for i in range(5)]

    outcomes = []
    for user in travelers:
        try:
            book_trip(db, trip.id, user.id)
            outcomes.append("booked")
        except CapacityError:
            outcomes.append("full")

    assert outcomes == ["booked", "booked", "booked", "full", "full"]
    counter, booked = snapshot(db, trip.id)
    assert counter == len(booked) == 3


def test_deleting_a_traveler_releases_their_seat(
    db, sample_trip, traveler, other_traveler
):
    book_trip(db, sample_trip.id, traveler.id)
    book_trip(db, sample_trip.id, other_traveler.id)

    db.delete(traveler)
    db.commit()

    counter, booked = snapshot(db, sample_trip.id)
    assert counter == len(booked) == 1
    assert booked == [other_traveler.id]


def test_cancel_is_not_counted_twice_after_traveler_removal(
    db, sample_trip, traveler, other_traveler
):
    book_trip(db, sample_trip.id, traveler.id)
    book_trip(db, sample_trip.id, other_traveler.id)
    cancel_booking(db, sample_trip.id, other_traveler.id)

    db.delete(traveler)
    db.commit()

    assert snapshot(db, sample_trip.id) == (0, [])
