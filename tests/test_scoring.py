"""Tests for src.contracts.scoring — risk score, immediate action, playbooks."""

from __future__ import annotations

import itertools

import pytest

from src.contracts.enums import Severity, ThreatType
from src.contracts.scoring import (
    BASE_SCORES,
    CRITICAL_PREAMBLE,
    RESPONSE_PLAYBOOK,
    SEVERITY_MULTIPLIERS,
    requires_immediate_action,
    response_actions,
    risk_score,
)

ALL_PAIRS = list(itertools.product(ThreatType, Severity))


class TestTables:
    def test_every_threat_has_base_score_and_playbook(self):
        assert set(BASE_SCORES) == set(ThreatType)
        assert set(RESPONSE_PLAYBOOK) == set(ThreatType)

    def test_every_severity_has_multiplier(self):
        assert set(SEVERITY_MULTIPLIERS) == set(Severity)

    def test_playbooks_have_four_actions(self):
        assert all(len(a) == 4 for a in RESPONSE_PLAYBOOK.values())


class TestRiskScore:
    @pytest.mark.parametrize(
        "threat, severity, expected",
        [
            (ThreatType.MALWARE, Severity.HIGH, 10.0),
            (ThreatType.PORT_SCAN, Severity.LOW, 2.0),
            (ThreatType.MALWARE, Severity.MEDIUM, 8.0),
            (ThreatType.UNAUTHORIZED_ACCESS, Severity.LOW, 4.5),
            (ThreatType.DOS_ATTACK, Severity.MEDIUM, 7.0),
            (ThreatType.PHISHING, Severity.HIGH, 9.0),
            (ThreatType.DATA_BREACH, Severity.LOW, 4.75),
            (ThreatType.PORT_SCAN, Severity.CRITICAL, 8.0),
            (ThreatType.SUSPICIOUS_ACTIVITY, Severity.HIGH, 7.5),
            (ThreatType.DATA_BREACH, Severity.CRITICAL, 10.0),
        ],
    )
    def test_known_values(self, threat, severity, expected):
        assert risk_score(threat, severity) == expected

    @pytest.mark.parametrize("threat, severity", ALL_PAIRS)
    def test_bounded_and_deterministic(self, threat, severity):
        first = risk_score(threat, severity)
        assert 0.0 <= first <= 10.0
        assert risk_score(threat, severity) == first

    @pytest.mark.parametrize("threat, severity", ALL_PAIRS)
    def test_equals_clamped_product(self, threat, severity):
        product = BASE_SCORES[threat] * SEVERITY_MULTIPLIERS[severity]
        assert risk_score(threat, severity) == min(10.0, product)


class TestImmediateAction:
    def test_critical_alone_is_enough(self):
        assert requires_immediate_action(ThreatType.PORT_SCAN, Severity.CRITICAL, 0.0)

    def test_score_alone_is_enough(self):
        assert requires_immediate_action(ThreatType.PHISHING, Severity.HIGH, 8.0)

    @pytest.mark.parametrize(
        "threat", [ThreatType.UNAUTHORIZED_ACCESS, ThreatType.DATA_BREACH, ThreatType.MALWARE]
    )
    def test_threat_kind_alone_is_enough(self, threat):
        assert requires_immediate_action(threat, Severity.LOW, 0.0)

    def test_none_hold(self):
        assert not requires_immediate_action(ThreatType.PORT_SCAN, Severity.HIGH, 7.99)

    @pytest.mark.parametrize("threat", list(ThreatType))
    def test_true_for_every_critical_incident(self, threat):
        score = risk_score(threat, Severity.CRITICAL)
        assert requires_immediate_action(threat, Severity.CRITICAL, score)

    @pytest.mark.parametrize("severity", list(Severity))
    def test_true_for_flagged_threats_at_any_severity(self, severity):
        for threat in (ThreatType.DATA_BREACH, ThreatType.UNAUTHORIZED_ACCESS, ThreatType.MALWARE):
            assert requires_immediate_action(threat, severity, risk_score(threat, severity))

    @pytest.mark.parametrize(
        "threat, severity",
        [
            (ThreatType.PORT_SCAN, Severity.LOW),
            (ThreatType.PHISHING, Severity.MEDIUM),
            (ThreatType.SUSPICIOUS_ACTIVITY, Severity.HIGH),
            (ThreatType.DOS_ATTACK, Severity.MEDIUM),
        ],
    )
    def test_false_cases(self, threat, severity):
        assert not requires_immediate_action(threat, severity, risk_score(threat, severity))


class TestResponseActions:
    def test_port_scan_critical_has_six(self):
        actions = response_actions(ThreatType.PORT_SCAN, Severity.CRITICAL)
        assert len(actions) == 6
        assert actions[:2] == ("ACTIVATE INCIDENT RESPONSE TEAM", "Initiate emergency procedures")
        assert actions[2:] == RESPONSE_PLAYBOOK[ThreatType.PORT_SCAN]

    @pytest.mark.parametrize("threat", list(ThreatType))
    def test_critical_prefix_for_every_threat(self, threat):
        actions = response_actions(threat, Severity.CRITICAL)
        assert actions[:2] == CRITICAL_PREAMBLE
        assert actions[2:] == RESPONSE_PLAYBOOK[threat]

    @pytest.mark.parametrize("threat, severity", [p for p in ALL_PAIRS if p[1] is not Severity.CRITICAL])
    def test_non_critical_is_plain_playbook(self, threat, severity):
        assert response_actions(threat, severity) == RESPONSE_PLAYBOOK[threat]

    def test_dos_order(self):
        assert response_actions(ThreatType.DOS_ATTACK, Severity.LOW) == (
            "Activate DDoS protection",
            "Block source IP addresses",
            "Scale up server resources",
            "Monitor network traffic",
        )
