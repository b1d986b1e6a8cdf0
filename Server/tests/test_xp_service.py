import json

import pytest

from newquiz.models import UserProfile
from newquiz.services.xp_service import (
    MultiChoicePerformance, ProfileNotFound, WordlePerformance, XpConfig, apply_xp,
    generate_multi_choice_xp, generate_wordle_xp, is_new_level, level, load_xp_config,
)


def test_multi_choice_xp_rewards_only_correct_answers():
    assert generate_multi_choice_xp(MultiChoicePerformance(0, 5, 1.0)) == 0
    # Two correct at the time limit: base XP only, no perfect bonus.
    assert generate_multi_choice_xp(MultiChoicePerformance(2, 5, 30.0)) == 20


def test_multi_choice_xp_speed_and_perfect_bonus():
    # Instant answers double the per-correct XP; all correct adds the bonus.
    assert generate_multi_choice_xp(MultiChoicePerformance(3, 3, 0.0)) == 3 * 20 + 20
    # Half the time limit: 10 + round(10 * 0.5) = 15 per correct.
    assert generate_multi_choice_xp(MultiChoicePerformance(2, 4, 15.0)) == 30


def test_speed_bonus_follows_the_quiz_time_limit():
    # A 30s average against a 60s countdown still earns half the speed bonus.
    assert generate_multi_choice_xp(MultiChoicePerformance(2, 4, 30.0, question_time_limit=60.0)) == 30
    assert generate_multi_choice_xp(MultiChoicePerformance(2, 4, 30.0)) == 20


def test_multi_choice_xp_rejects_impossible_counts():
    with pytest.raises(ValueError):
        generate_multi_choice_xp(MultiChoicePerformance(6, 5, 1.0))


def test_wordle_xp_drops_with_rows_used():
    assert generate_wordle_xp(WordlePerformance(rows_used=1, solved=True)) == 60
    assert generate_wordle_xp(WordlePerformance(rows_used=3, solved=True)) == 40
    assert generate_wordle_xp(WordlePerformance(rows_used=9, solved=True)) == 10
    assert generate_wordle_xp(WordlePerformance(rows_used=6, solved=False)) == 0


def test_level_curve():
    assert level(0) == 1
    assert level(99) == 1
    assert level(100) == 2
    assert level(399) == 2
    assert level(400) == 3
    assert is_new_level(90, 20)
    assert not is_new_level(100, 50)


def test_level_never_decreases():
    levels = [level(xp) for xp in range(0, 20001, 7)]
    assert levels == sorted(levels)
    assert levels[-1] == level(20000)


def test_is_new_level_agrees_with_level():
    for total in range(0, 2000, 13):
        for delta in (0, 1, 37, 100, 350, 1200):
            assert is_new_level(total, delta) == (level(total) != level(total + delta))


def test_apply_xp_returns_level_up_decision():
    award = apply_xp(UserProfile(uid="u", total_xp=90), 20)
    assert award.new_total_xp == 110
    assert award.leveled_up
    assert award.diamonds_reward == 10

    award = apply_xp(UserProfile(uid="u", total_xp=0), 10)
    assert not award.leveled_up
    assert award.diamonds_reward == 0


def test_apply_xp_without_profile():
    with pytest.raises(ProfileNotFound):
        apply_xp(None, 10)


def test_load_xp_config(tmp_path):
    assert load_xp_config(None) == XpConfig()

    path = tmp_path / "xp.json"
    path.write_text(json.dumps({"xp_per_correct": 5, "new_level_diamonds": 3}))
    config = load_xp_config(str(path))
    assert config.xp_per_correct == 5
    assert config.new_level_diamonds == 3

    path.write_text(json.dumps({"bogus": 1}))
    with pytest.raises(ValueError):
        load_xp_config(str(path))
