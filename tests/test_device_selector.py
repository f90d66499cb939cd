"""
Tests for device selection by roster and battery level
"""
import pytest

from models import db
from utils.device_selector import select_devices, DataAccessError


def test_only_devices_at_or_above_threshold(devices):
    result = select_devices(['QA-001', 'QA-002', 'QA-003'], 20)

    assert [d['barcode'] for d in result] == ['QA-001', 'QA-002']


def test_projection_keeps_exactly_three_fields(devices):
    result = select_devices(['QA-001'], 0)

    assert result == [{'barcode': 'QA-001', 'hotel_id': 10, 'hotel_room_number': '101'}]


def test_devices_outside_roster_are_ignored(devices):
    result = select_devices(['QA-001', 'QA-002', 'QA-003'], 0)

    assert 'OTHER-1' not in [d['barcode'] for d in result]
    assert len(result) == 3


def test_no_device_meets_threshold_returns_empty_list(devices):
    assert select_devices(['QA-001', 'QA-002', 'QA-003'], 101) == []


def test_empty_roster_returns_empty_list(devices):
    assert select_devices([], 0) == []


def test_query_failure_raises_data_access_error(app):
    db.drop_all()

    with pytest.raises(DataAccessError):
        select_devices(['QA-001'], 0)
