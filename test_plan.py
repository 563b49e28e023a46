#!/usr/bin/env python3
"""
Test suite for the reconciliation planner and policies.
"""

import unittest
from unittest.mock import Mock

from dns_records_sync.core.endpoint import Endpoint
from dns_records_sync.core.plan import Changes, Plan
from dns_records_sync.core.policy import Policy, SyncPolicy, UpsertOnlyPolicy


def names(records):
    return [record.name for record in records]


class TestPlanCalculate(unittest.TestCase):
    """Test Plan.calculate()."""

    def setUp(self):
        """Set up test fixtures."""
        self.foo_v1 = Endpoint("foo.example.org", "1.2.3.4", "A", labels={"owner": "default"})
        self.foo_v2 = Endpoint("foo.example.org", "5.6.7.8", "A")
        self.bar = Endpoint("bar.example.org", "lb.example.org", "CNAME", labels={"owner": "default"})
        self.baz = Endpoint("baz.example.org", "10.0.0.1", "A")

    def calculate(self, current, desired, policies=()):
        return Plan(current=current, desired=desired, policies=policies).calculate()

    def test_create_when_no_current_record(self):
        """Test that records missing from the backend are created."""
        plan = self.calculate([], [self.baz])

        self.assertEqual(plan.changes.create, [self.baz])
        self.assertIs(plan.changes.create[0], self.baz)
        self.assertEqual(plan.changes.update_old, [])
        self.assertEqual(plan.changes.update_new, [])
        self.assertEqual(plan.changes.delete, [])

    def test_delete_when_not_desired(self):
        """Test that undesired records are deleted."""
        plan = self.calculate([self.bar], [])

        self.assertEqual(plan.changes.delete, [self.bar])
        self.assertEqual(plan.changes.create, [])

    def test_identical_records_produce_no_changes(self):
        """Test idempotence for identical names, targets and TTLs."""
        current = [
            Endpoint("foo.example.org", "1.2.3.4", "A", ttl=300),
            Endpoint("bar.example.org", "lb.example.org", "CNAME", ttl=60),
        ]
        desired = [
            Endpoint("foo.example.org", "1.2.3.4", "A", ttl=300),
            Endpoint("bar.example.org", "lb.example.org", "CNAME", ttl=60),
        ]

        changes = self.calculate(current, desired).changes

        self.assertFalse(changes.has_changes())
        self.assertEqual(changes.update_old, [])
        self.assertEqual(changes.update_new, [])

    def test_unconfigured_ttl_with_same_target_is_skipped(self):
        """Test that an unconfigured desired TTL never triggers an update."""
        current = [Endpoint("foo.example.org", "1.2.3.4", "A", ttl=300)]
        desired = [Endpoint("foo.example.org", "1.2.3.4", "A")]

        changes = self.calculate(current, desired).changes

        self.assertEqual(changes.total_changes, 0)

    def test_target_change_updates_record(self):
        """Test that a changed target produces a paired update."""
        plan = self.calculate([self.foo_v1], [self.foo_v2])

        self.assertEqual(plan.changes.update_old, [self.foo_v1])
        self.assertEqual(len(plan.changes.update_new), 1)
        updated = plan.changes.update_new[0]
        self.assertEqual(updated.name, "foo.example.org")
        self.assertEqual(updated.target, "5.6.7.8")
        self.assertEqual(updated.labels, {"owner": "default"})

    def test_target_change_keeps_current_record_type(self):
        """Test that the record type is inherited from the backend on target change."""
        current = [Endpoint("foo.example.org", "1.2.3.4", "A")]
        desired = [Endpoint("foo.example.org", "lb.example.org", "CNAME")]

        updated = self.calculate(current, desired).changes.update_new[0]

        self.assertEqual(updated.record_type, "A")
        self.assertEqual(updated.target, "lb.example.org")

    def test_target_change_keeps_current_ttl_when_unconfigured(self):
        """Test that the backend TTL is preserved when none was requested."""
        current = [Endpoint("foo.example.org", "1.2.3.4", "A", ttl=300)]
        desired = [Endpoint("foo.example.org", "5.6.7.8", "A")]

        updated = self.calculate(current, desired).changes.update_new[0]

        self.assertEqual(updated.ttl, 300)

    def test_ttl_change_updates_record(self):
        """Test that a configured, different TTL produces an update."""
        current = [Endpoint("foo.example.org", "1.2.3.4", "A", ttl=300)]
        desired = [Endpoint("foo.example.org", "1.2.3.4", "A", ttl=60)]

        changes = self.calculate(current, desired).changes

        self.assertEqual(changes.update_old, current)
        self.assertEqual(changes.update_new[0].ttl, 60)

    def test_ttl_change_only_keeps_desired_record_type(self):
        """Test that the record type is not inherited when only the TTL changes."""
        current = [Endpoint("foo.example.org", "lb.example.org", "A", ttl=300)]
        desired = [Endpoint("foo.example.org", "lb.example.org", "CNAME", ttl=60)]

        updated = self.calculate(current, desired).changes.update_new[0]

        self.assertEqual(updated.record_type, "CNAME")

    def test_zero_ttl_counts_as_configured(self):
        """Test that an explicit TTL of 0 differs from an unconfigured TTL."""
        current = [Endpoint("foo.example.org", "1.2.3.4", "A", ttl=300)]
        desired = [Endpoint("foo.example.org", "1.2.3.4", "A", ttl=0)]

        changes = self.calculate(current, desired).changes

        self.assertEqual(changes.update_new[0].ttl, 0)

    def test_desired_labels_win_over_current_labels(self):
        """Test that labels are merged without overwriting desired values."""
        current = [Endpoint("foo.example.org", "1.2.3.4", labels={"owner": "default", "zone": "a"})]
        desired = [Endpoint("foo.example.org", "5.6.7.8", labels={"zone": "b"})]

        updated = self.calculate(current, desired).changes.update_new[0]

        self.assertEqual(updated.labels, {"owner": "default", "zone": "b"})

    def test_desired_records_are_not_mutated(self):
        """Test that update targets are new values, not the caller's objects."""
        current = [Endpoint("foo.example.org", "1.2.3.4", "A", ttl=300, labels={"owner": "default"})]
        desired = Endpoint("foo.example.org", "lb.example.org", "CNAME")

        updated = self.calculate(current, [desired]).changes.update_new[0]

        self.assertIsNot(updated, desired)
        self.assertEqual(desired.labels, {})
        self.assertEqual(desired.record_type, "CNAME")
        self.assertIsNone(desired.ttl)
        self.assertEqual(updated.record_type, "A")
        self.assertEqual(updated.ttl, 300)

    def test_records_match_on_name_only(self):
        """Test that a type difference alone does not produce create and delete."""
        current = [Endpoint("foo.example.org", "1.2.3.4", "A")]
        desired = [Endpoint("foo.example.org", "some text", "TXT")]

        changes = self.calculate(current, desired).changes

        self.assertEqual(changes.create, [])
        self.assertEqual(changes.delete, [])
        self.assertEqual(names(changes.update_old), ["foo.example.org"])
        self.assertEqual(names(changes.update_new), ["foo.example.org"])

    def test_first_current_match_is_used(self):
        """Test that the first current record with a matching name is the update source."""
        first = Endpoint("foo.example.org", "1.1.1.1", "A")
        second = Endpoint("foo.example.org", "2.2.2.2", "A")
        desired = [Endpoint("foo.example.org", "3.3.3.3", "A")]

        changes = self.calculate([first, second], desired).changes

        self.assertEqual(len(changes.update_old), 1)
        self.assertIs(changes.update_old[0], first)

    def test_changes_partition_names(self):
        """Test that create, update and delete never share a name."""
        current = [self.foo_v1, self.bar, Endpoint("same.example.org", "9.9.9.9")]
        desired = [self.foo_v2, self.baz, Endpoint("same.example.org", "9.9.9.9")]

        changes = self.calculate(current, desired).changes

        self.assertEqual(names(changes.create), ["baz.example.org"])
        self.assertEqual(names(changes.update_old), ["foo.example.org"])
        self.assertEqual(names(changes.update_new), ["foo.example.org"])
        self.assertEqual(names(changes.delete), ["bar.example.org"])

    def test_update_lists_are_paired_in_order(self):
        """Test that update_old[i] and update_new[i] carry the same name."""
        current = [Endpoint(f"h{i}.example.org", "10.0.0.1") for i in range(5)]
        desired = [Endpoint(f"h{i}.example.org", "10.0.0.2") for i in reversed(range(5))]

        changes = self.calculate(current, desired).changes

        self.assertEqual(len(changes.update_old), 5)
        for old, new in zip(changes.update_old, changes.update_new):
            with self.subTest(name=old.name):
                self.assertEqual(old.name, new.name)

    def test_result_keeps_inputs(self):
        """Test that the returned plan references the original lists."""
        current = [self.foo_v1]
        desired = [self.foo_v2]
        original = Plan(current=current, desired=desired)

        plan = original.calculate()

        self.assertIs(plan.current, current)
        self.assertIs(plan.desired, desired)
        self.assertIsNone(original.changes)
        self.assertIsNotNone(plan.changes)

    def test_policies_applied_in_order(self):
        """Test that each policy receives the previous policy's output."""
        intermediate = Changes()
        final = Changes()
        first = Mock(spec=Policy)
        first.apply.return_value = intermediate
        second = Mock(spec=Policy)
        second.apply.return_value = final

        plan = self.calculate([self.bar], [self.baz], policies=[first, second])

        computed = first.apply.call_args[0][0]
        self.assertEqual(names(computed.create), ["baz.example.org"])
        self.assertEqual(names(computed.delete), ["bar.example.org"])
        second.apply.assert_called_once_with(intermediate)
        self.assertIs(plan.changes, final)

    def test_upsert_only_policy_suppresses_deletes(self):
        """Test planning with the upsert-only policy."""
        plan = self.calculate([self.bar], [self.baz], policies=[UpsertOnlyPolicy()])

        self.assertEqual(names(plan.changes.create), ["baz.example.org"])
        self.assertEqual(plan.changes.delete, [])

    def test_diagnostics_go_to_given_logger(self):
        """Test that planning diagnostics are reported to the supplied logger."""
        log = Mock()

        with_log = Plan(current=[self.bar], desired=[self.baz]).calculate(log=log)
        without_log = Plan(current=[self.bar], desired=[self.baz]).calculate()

        self.assertTrue(log.debug.called)
        self.assertEqual(with_log.changes, without_log.changes)


class TestPolicies(unittest.TestCase):
    """Test the synchronization policies."""

    def setUp(self):
        """Set up test fixtures."""
        self.changes = Changes(
            create=[Endpoint("new.example.org", "10.0.0.1")],
            update_old=[Endpoint("foo.example.org", "10.0.0.2")],
            update_new=[Endpoint("foo.example.org", "10.0.0.3")],
            delete=[Endpoint("old.example.org", "10.0.0.4")],
        )

    def test_sync_policy_passes_changes_through(self):
        """Test that the sync policy keeps every action."""
        self.assertIs(SyncPolicy().apply(self.changes), self.changes)

    def test_upsert_only_policy_clears_deletes(self):
        """Test that upsert-only keeps creates and updates but drops deletes."""
        result = UpsertOnlyPolicy().apply(self.changes)

        self.assertEqual(result.create, self.changes.create)
        self.assertEqual(result.update_old, self.changes.update_old)
        self.assertEqual(result.update_new, self.changes.update_new)
        self.assertEqual(result.delete, [])

    def test_upsert_only_policy_leaves_input_intact(self):
        """Test that upsert-only does not modify the change-set it receives."""
        UpsertOnlyPolicy().apply(self.changes)

        self.assertEqual(len(self.changes.delete), 1)

    def test_policy_names(self):
        """Test policy names used in configuration."""
        self.assertEqual(SyncPolicy.name, "sync")
        self.assertEqual(UpsertOnlyPolicy.name, "upsert-only")


class TestEndpoint(unittest.TestCase):
    """Test the Endpoint model."""

    def test_ttl_configured(self):
        """Test the unconfigured TTL sentinel."""
        self.assertFalse(Endpoint("foo.example.org", "1.2.3.4").ttl_configured)
        self.assertTrue(Endpoint("foo.example.org", "1.2.3.4", ttl=0).ttl_configured)

    def test_owner(self):
        """Test reading the owner label."""
        self.assertEqual(Endpoint("a.example.org", "1.2.3.4", labels={"owner": "x"}).owner, "x")
        self.assertEqual(Endpoint("a.example.org", "1.2.3.4").owner, "")

    def test_str(self):
        """Test the string form used in logs."""
        self.assertEqual(
            str(Endpoint("foo.example.org", "1.2.3.4", "A", ttl=300)),
            "foo.example.org 300 IN A 1.2.3.4",
        )
        self.assertEqual(
            str(Endpoint("foo.example.org", "1.2.3.4")), "foo.example.org - IN A 1.2.3.4"
        )


if __name__ == "__main__":
    unittest.main()
