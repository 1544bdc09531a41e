import dataclasses

import pytest

from vulnscope.mitre import (
    AttackMapper,
    AttackTechnique,
    Tactic,
    get_attack_mapper,
    tactic_to_color,
    tactic_to_string,
)


@pytest.fixture
def mapper():
    return get_attack_mapper()


@pytest.mark.parametrize(
    "vulnerability, technique_id, name, tactics",
    [
        ("EternalBlue", "T1210", "Exploitation of Remote Services", ["Lateral Movement"]),
        ("Heartbleed", "T1040", "Network Sniffing", ["Credential Access", "Discovery"]),
        ("Shellshock", "T1190", "Exploit Public-Facing Application", ["Initial Access"]),
        ("XSS", "T1189", "Drive-by Compromise", ["Initial Access"]),
        ("SSHBruteForce", "T1110", "Brute Force", ["Credential Access"]),
        (
            "FTPAnonymous",
            "T1078",
            "Valid Accounts",
            ["Initial Access", "Persistence", "Privilege Escalation", "Defense Evasion"],
        ),
    ],
)
def test_vulnerability_mappings(mapper, vulnerability, technique_id, name, tactics):
    technique = mapper.map_vulnerability(vulnerability)
    assert technique is not None
    assert technique.technique_id == technique_id
    assert technique.name == name
    assert [tactic_to_string(t) for t in technique.tactics] == tactics


def test_eternalblue_details(mapper):
    technique = mapper.map_vulnerability("EternalBlue")
    assert technique.mitigations[0] == "Apply MS17-010 security patch"
    assert len(technique.mitigations) == 5
    assert technique.url.endswith("/techniques/T1210/")


def test_subtechnique_url(mapper):
    technique = mapper.get_technique_by_id("T1078.002")
    assert technique.url.endswith("/techniques/T1078/002/")


def test_lateral_movement_techniques(mapper):
    found = mapper.get_techniques_by_tactic(Tactic.LATERAL_MOVEMENT)
    assert [t.technique_id for t in found] == ["T1210", "T1550.001"]


def test_initial_access_techniques(mapper):
    found = mapper.get_techniques_by_tactic(Tactic.INITIAL_ACCESS)
    assert len(found) == 8
    assert [t.technique_id for t in found] == [
        "T1190", "T1190", "T1078", "T1078.002", "T1189", "T1190", "T1584.001", "T1190",
    ]


def test_credential_access_techniques(mapper):
    found = mapper.get_techniques_by_tactic(Tactic.CREDENTIAL_ACCESS)
    assert [t.technique_id for t in found] == ["T1040", "T1110", "T1539", "T1040"]


def test_execution_techniques(mapper):
    found = mapper.get_techniques_by_tactic(Tactic.EXECUTION)
    assert [t.technique_id for t in found] == ["T1059", "T1203"]


def test_unknown_tactic_yields_empty(mapper):
    assert mapper.get_techniques_by_tactic(Tactic.EXFILTRATION) == []


def test_unknown_vulnerability(mapper):
    assert mapper.map_vulnerability("NoSuchThing") is None


def test_alias_without_stored_technique(mapper):
    assert mapper.map_vulnerability("Command Injection") is None


def test_aliases_share_technique(mapper):
    assert mapper.map_vulnerability("XXE") == mapper.map_vulnerability("Shellshock")
    assert mapper.map_vulnerability("BlueKeep").technique_id == "T1210"
    assert mapper.map_vulnerability("JWTDetector").technique_id == "T1550.001"


def test_named_entry_lookup(mapper):
    technique = mapper.get_technique_by_id("XXE")
    assert technique.technique_id == "T1190"
    assert technique.description.startswith("XXE (XML External Entity)")


def test_get_missing_technique(mapper):
    assert mapper.get_technique_by_id("T9999") is None


@pytest.mark.parametrize(
    "tactic, color",
    [
        (Tactic.INITIAL_ACCESS, "#ff6666"),
        (Tactic.EXECUTION, "#ff9966"),
        (Tactic.LATERAL_MOVEMENT, "#ff66cc"),
        (Tactic.IMPACT, "#cc0000"),
        (Tactic.DISCOVERY, "#cccccc"),
    ],
)
def test_tactic_colors(tactic, color):
    assert tactic_to_color(tactic) == color


def test_tactic_names():
    assert tactic_to_string(Tactic.COMMAND_AND_CONTROL) == "Command and Control"
    assert tactic_to_string(Tactic.PRIVILEGE_ESCALATION) == "Privilege Escalation"


def test_shared_instance_maps_vulnerabilities():
    first = get_attack_mapper()
    second = get_attack_mapper()
    assert first is second
    technique = second.map_vulnerability("HeartbleedDetector")
    assert technique.technique_id == "T1040"
    assert technique.name == "Network Sniffing"


def test_techniques_are_immutable(mapper):
    technique = mapper.map_vulnerability("XSS")
    with pytest.raises(dataclasses.FrozenInstanceError):
        technique.name = "changed"
    assert AttackMapper().map_vulnerability("XSS").name == "Drive-by Compromise"


def test_technique_default_url():
    technique = AttackTechnique("T1234", "Example", [Tactic.IMPACT])
    assert technique.url.endswith("/techniques/T1234/")
    assert technique.tactics == (Tactic.IMPACT,)


def test_mitigation_lists_are_complete(mapper):
    technique = mapper.get_technique_by_id("T1539")
    assert technique.mitigations[0] == "Never use wildcard (*) with credentials"
    assert technique.mitigations[-1] == "Set SameSite cookie attribute"
    assert len(technique.mitigations) == 6