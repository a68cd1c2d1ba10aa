# tests/test_build_submitter.py

from gedcom_codec.parser_core import GedcomParser, parse
from gedcom_codec.registry import build_registry
from gedcom_codec.registry.build_submitter import build_submitter_with_issues
from gedcom_codec.validation import IssueKind


def test_build_submitter_basic(make_record):
    subm = make_record(
        """
        0 @U1@ SUBM
        1 NAME Ann Researcher
        1 ADDR 4 Mill Lane
        1 PHON 555-0199
        1 EMAIL ann@example.org
        1 NOTE Family historian
        """
    )

    entity, issues = build_submitter_with_issues(subm)

    assert issues == []
    assert (entity.id, entity.name) == ("U1", "Ann Researcher")
    assert entity.address == "4 Mill Lane"
    assert entity.phone == "555-0199"
    assert entity.email == "ann@example.org"
    assert entity.notes == ["Family historian"]


def test_missing_name_is_reported(make_record):
    entity, issues = build_submitter_with_issues(make_record("0 @U2@ SUBM"))
    assert entity.name == ""
    assert issues[0].kind is IssueKind.MISSING_REQUIRED_FIELD


def test_submitters_and_repositories_reach_the_registry():
    file = parse(
        "0 HEAD\n1 SUBM @U1@\n0 @U1@ SUBM\n1 NAME Ann\n"
        "0 @R1@ REPO\n1 NAME Archive\n0 TRLR"
    )
    registry = build_registry(file)

    assert registry.get_submitter("U1").name == "Ann"
    assert registry.get_repository("R1").name == "Archive"
    assert registry.counts()["submitters"] == 1
    assert GedcomParser.parse_submitter(file.submitters[0]).name == "Ann"
    assert GedcomParser.parse_repository(file.repositories[0]).name == "Archive"
