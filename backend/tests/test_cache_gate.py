"""Tests for the fingerprint cache gate."""

import hashlib
from datetime import UTC, datetime
from email.utils import format_datetime

import pytest

from mediaconf.configuration import (
    FingerprintCacheGate,
    ResourceIdentity,
    compute_fingerprint,
)
from mediaconf.configuration.cache import datetime_from_ticks, ticks_from_datetime
from mediaconf.persistence.adapter import UNIX_EPOCH_TICKS


class CountingProducer:
    def __init__(self, body):
        self.body = body
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.body


@pytest.fixture
def gate():
    return FingerprintCacheGate(started_at=datetime(2024, 1, 1, tzinfo=UTC))


@pytest.fixture
def identity():
    return ResourceIdentity(
        path="/data/config/system.json",
        modified_at_ticks=ticks_from_datetime(datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)),
    )


class TestTicks:
    def test_unix_epoch(self):
        assert ticks_from_datetime(datetime(1970, 1, 1, tzinfo=UTC)) == UNIX_EPOCH_TICKS

    def test_round_trip_to_datetime(self):
        moment = datetime(2024, 3, 1, 12, 30, 15, 250000, tzinfo=UTC)
        assert datetime_from_ticks(ticks_from_datetime(moment)) == moment


class TestFingerprint:
    def test_md5_of_path_and_ticks(self, identity):
        expected = hashlib.md5(
            f"{identity.path}{identity.modified_at_ticks}".encode()
        ).hexdigest()
        assert compute_fingerprint(identity) == expected

    def test_stable_for_unchanged_resource(self, identity):
        same = ResourceIdentity(identity.path, identity.modified_at_ticks)
        assert compute_fingerprint(identity) == compute_fingerprint(same)

    def test_changes_with_modification_time(self, identity):
        later = ResourceIdentity(identity.path, identity.modified_at_ticks + 1)
        assert compute_fingerprint(identity) != compute_fingerprint(later)

    def test_changes_with_path(self, identity):
        other = ResourceIdentity("/data/config/encoding.json", identity.modified_at_ticks)
        assert compute_fingerprint(identity) != compute_fingerprint(other)


class TestEvaluate:
    def test_no_validators_produces_body(self, gate, identity):
        producer = CountingProducer({"ServerName": "Den"})
        decision = gate.evaluate(identity, producer)

        assert decision.not_modified is False
        assert decision.body == {"ServerName": "Den"}
        assert decision.fingerprint == compute_fingerprint(identity)
        assert producer.calls == 1

    def test_matching_etag_skips_producer(self, gate, identity):
        producer = CountingProducer({})
        etag = f'"{compute_fingerprint(identity)}"'
        decision = gate.evaluate(identity, producer, if_none_match=etag)

        assert decision.not_modified is True
        assert decision.body is None
        assert producer.calls == 0

    def test_weak_and_listed_etags_match(self, gate, identity):
        fingerprint = compute_fingerprint(identity)
        producer = CountingProducer({})
        decision = gate.evaluate(
            identity, producer, if_none_match=f'"stale", W/"{fingerprint}"'
        )
        assert decision.not_modified is True

    def test_wildcard_etag_matches(self, gate, identity):
        decision = gate.evaluate(identity, CountingProducer({}), if_none_match="*")
        assert decision.not_modified is True

    def test_stale_etag_produces_body(self, gate, identity):
        producer = CountingProducer({"a": 1})
        decision = gate.evaluate(identity, producer, if_none_match='"stale"')
        assert decision.not_modified is False
        assert producer.calls == 1

    def test_if_modified_since_at_last_write(self, gate, identity):
        since = format_datetime(identity.last_modified, usegmt=True)
        decision = gate.evaluate(identity, CountingProducer({}), if_modified_since=since)
        assert decision.not_modified is True

    def test_if_modified_since_before_last_write(self, gate, identity):
        since = format_datetime(datetime(2024, 2, 1, tzinfo=UTC), usegmt=True)
        decision = gate.evaluate(identity, CountingProducer({}), if_modified_since=since)
        assert decision.not_modified is False

    def test_unparseable_if_modified_since_is_ignored(self, gate, identity):
        decision = gate.evaluate(
            identity, CountingProducer({}), if_modified_since="yesterday-ish"
        )
        assert decision.not_modified is False

    def test_etag_takes_precedence(self, gate, identity):
        """A stale entity tag wins over a satisfied If-Modified-Since."""
        since = format_datetime(datetime(2030, 1, 1, tzinfo=UTC), usegmt=True)
        decision = gate.evaluate(
            identity,
            CountingProducer({}),
            if_none_match='"stale"',
            if_modified_since=since,
        )
        assert decision.not_modified is False


class TestSyntheticIdentity:
    def test_stamped_with_start_time(self, gate):
        identity = gate.synthetic_identity("/System/Configuration/MetadataPlugins")
        assert identity.last_modified == datetime(2024, 1, 1, tzinfo=UTC)

    def test_stable_within_process(self, gate):
        first = gate.synthetic_identity("/derived")
        second = gate.synthetic_identity("/derived")
        assert compute_fingerprint(first) == compute_fingerprint(second)
