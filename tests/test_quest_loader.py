from pathlib import Path

import pytest

from shellcraft.quests import QuestDataError, load_quests, parse_quests

SAMPLE = '''
# leading comments are ignored
%% QUEST 1
id=1
name=First Steps
min_level=0
reward_xp=100
offer_title=First Steps
offer_narrative="""
Line one.
Line two.
"""
offer_objective=Walk
offer_reward=100 XP
journal_description="""Single line in quotes"""
color=green
%% QUEST 2
id=2
name=Broken Number
min_level=lots
%% QUEST 3
name=No id here
%% QUEST
# commented-out block
id=9
'''


def test_bundled_quest_1_loads():
    quests = load_quests()
    quest = quests[1]

    assert quest.id == 1
    assert quest.name == "The Sewer Cleanse"
    assert quest.min_level == 0
    assert quest.reward_xp == 1000
    assert quest.offer_title == "The Sewer Cleanse"
    assert quest.offer_objective == "Eliminate all rats in /sewer"
    assert quest.offer_reward == "1000 XP"
    assert "garbage collection" in quest.offer_narrative
    assert "garbage collector" in quest.journal_description
    assert quest.progress_format is not None


def test_bundled_catalog_has_five_quests():
    quests = load_quests()
    assert sorted(quests) == [1, 2, 3, 4, 5]


def test_parse_sample_blocks():
    quests = parse_quests(SAMPLE)
    assert sorted(quests) == [1, 2]

    first = quests[1]
    assert first.offer_narrative == "Line one.\nLine two."
    assert first.journal_description == "Single line in quotes"
    assert first.journal_objective is None
    assert not hasattr(first, "color")


def test_unparsable_numbers_become_zero():
    assert parse_quests(SAMPLE)[2].min_level == 0


@pytest.mark.parametrize("raw", ["-3", "4294967296", "12abc"])
def test_out_of_range_numbers_become_zero(raw):
    quest = parse_quests(f"%% QUEST 4\nid=4\nmin_level={raw}\nreward_xp={raw}\n")[4]
    assert quest.min_level == 0
    assert quest.reward_xp == 0


@pytest.mark.parametrize("raw", ["4294967296", "-1", "0", "x"])
def test_block_with_unusable_id_is_dropped_alone(raw):
    text = f"%% QUEST 1\nid=1\nname=Kept\n%% QUEST 2\nid={raw}\nname=Dropped\n%% QUEST 3\nid=3\n"
    quests = parse_quests(text)
    assert sorted(quests) == [1, 3]
    assert quests[1].name == "Kept"


def test_largest_slot_id_is_accepted():
    assert list(parse_quests("%% QUEST 9\nid=4294967295\n")) == [4294967295]


def test_unterminated_multiline_keeps_text():
    quests = parse_quests('%% QUEST 5\nid=5\njournal_description="""\nruns to the end\n')
    assert quests[5].journal_description == "runs to the end"


def test_load_from_path(tmp_path: Path):
    p = tmp_path / "quests.txt"
    p.write_text("%% QUEST 8\nid=8\nname=Custom\n", encoding="utf-8")
    assert load_quests(p)[8].name == "Custom"


def test_missing_path_raises(tmp_path: Path):
    with pytest.raises(QuestDataError):
        load_quests(tmp_path / "nope.txt")
