from modpak.models import FileRef, ModVersionCandidate, StabilityTier
from modpak.services import VersionSelector
from tests.helpers import ScriptedPrompter


def candidate(vid, number, tier=StabilityTier.RELEASE, filename=None):
    return ModVersionCandidate(
        id=vid,
        display_name=f"Mod {number}",
        version_number=number,
        stability=tier,
        published_at="2024-03-01T12:00:00Z",
        files=[FileRef(id=vid, filename=filename or f"mod-{number}.jar", size=1)],
    )


CANDIDATES = [
    candidate("v3", "3.0.0-beta", StabilityTier.BETA),
    candidate("v2", "2.0.0"),
    candidate("v1", "1.0.0", filename="mod-fabric-1.0.0+mc1.20.1.jar"),
]


def test_filter_stable_keeps_only_releases():
    assert [c.id for c in VersionSelector.filter_stable(CANDIDATES, False)] == ["v2", "v1"]
    assert len(VersionSelector.filter_stable(CANDIDATES, True)) == 3


def test_filter_stable_with_only_unstable_is_empty():
    unstable = [
        candidate("b", "1.0-beta", StabilityTier.BETA),
        candidate("a", "1.0-alpha", StabilityTier.ALPHA),
    ]
    assert VersionSelector.filter_stable(unstable, False) == []


def test_select_default_is_first_in_upstream_order():
    assert VersionSelector.select_default(CANDIDATES).id == "v3"
    assert VersionSelector.select_default([]) is None


def test_select_explicit_by_id_number_or_filename():
    assert VersionSelector.select_explicit(CANDIDATES, "v2").id == "v2"
    assert VersionSelector.select_explicit(CANDIDATES, "1.0.0").id == "v1"
    assert VersionSelector.select_explicit(CANDIDATES, "mc1.20.1").id == "v1"
    assert VersionSelector.select_explicit(CANDIDATES, "9.9.9") is None


def test_prompt_returns_chosen_candidate_and_marks_current():
    prompter = ScriptedPrompter(["2"])
    selector = VersionSelector(prompter)

    chosen = selector.prompt(CANDIDATES, "Mod", current_file="mod-fabric-1.0.0+mc1.20.1.jar")

    assert chosen.id == "v2"
    listing = [line for line in prompter.output if ". " in line]
    assert len(listing) == 3
    assert listing[2].startswith("*")
    assert not listing[0].startswith("*")


def test_prompt_truncates_listing():
    many = [candidate(f"v{i}", f"{i}.0") for i in range(30)]
    prompter = ScriptedPrompter(["16"])
    selector = VersionSelector(prompter)

    assert selector.prompt(many, "Mod") is None
    assert "1-15" in prompter.questions[0]


def test_prompt_invalid_input_is_cancellation():
    for answer in ["0", "4", "abc", ""]:
        selector = VersionSelector(ScriptedPrompter([answer]))
        assert selector.prompt(CANDIDATES, "Mod") is None
