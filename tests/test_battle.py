import random

import pytest

from pocket_quest.actors import Player
from pocket_quest.battle import (
    LEAF_SLASH,
    VINE_WHIP,
    BattleOutcome,
    BattlePhase,
    BattleSession,
    Move,
    attempt_run,
    calculate_exp_gain,
    enemy_turn,
    handle_battle_action,
    player_attack,
    start_trainer_battle,
    start_wild_battle,
    update_battle,
    use_potion,
)
from pocket_quest.config import RESPAWN_POSITION, WILD_SPECIES
from pocket_quest.controls import Control


def ready(battle: BattleSession) -> BattleSession:
    """Skip the intro message so the battle accepts input."""
    battle.hold(battle.message, 0, BattlePhase.AWAITING_ACTION)
    return battle


def wild_battle(player, enemy_hp=20, enemy_level=3):
    battle = BattleSession(
        player_name=player.name,
        player_level=player.level,
        player_max_hp=player.max_hp,
        player_hp=player.hp,
        enemy_name="Aquafi",
        enemy_level=enemy_level,
        enemy_max_hp=enemy_hp,
        enemy_hp=enemy_hp,
    )
    return battle


def run_ticks(battle, player, rng, count):
    outcomes = []
    for _ in range(count):
        outcome = update_battle(battle, player, rng)
        if outcome is not None:
            outcomes.append(outcome)
    return outcomes


def test_move_rejects_inverted_power_range():
    with pytest.raises(ValueError):
        Move("Backwards", 9, 5)


def test_wild_battle_ranges(player):
    rng = random.Random(7)
    for _ in range(500):
        battle = start_wild_battle(player, rng)
        assert 2 <= battle.enemy_level <= 5
        assert 18 <= battle.enemy_hp <= 31
        assert battle.enemy_hp == battle.enemy_max_hp
        assert battle.enemy_name in WILD_SPECIES
        assert not battle.trainer_battle


def test_wild_battle_intro_holds_input(player, scripted_rng):
    battle = start_wild_battle(player, scripted_rng(ints=[25, 4], choices=["Voltlet"]))
    assert battle.message == "A wild Voltlet appeared!"
    assert battle.message_ticks == 220
    assert battle.phase == BattlePhase.MESSAGE
    assert not battle.accepts_input
    assert (battle.enemy_hp, battle.enemy_level) == (25, 4)
    assert (battle.player_hp, battle.player_level) == (player.hp, player.level)


def test_trainer_battle_scales_with_player():
    player = Player(level=7, badges=2)
    battle = start_trainer_battle(player, "Rival Ken")
    assert battle.trainer_battle
    assert battle.enemy_name == "Rivalmon"
    assert battle.enemy_level == 8
    assert battle.enemy_hp == battle.enemy_max_hp == 34
    assert battle.message == "Rival Ken challenges you!"


def test_attack_damage_includes_half_level(player, scripted_rng):
    battle = ready(wild_battle(player, enemy_hp=30))
    player_attack(battle, player, LEAF_SLASH, scripted_rng(ints=[5]))
    # 5 rolled + 5 // 2
    assert battle.enemy_hp == 23
    assert battle.message == "Leaflit used Leaf Slash! (-7)"
    assert battle.message_ticks == 45
    assert battle.awaiting_enemy_turn


def test_attack_knockout_awards_exp_and_resolves(player, scripted_rng):
    battle = ready(wild_battle(player, enemy_hp=5, enemy_level=4))
    player_attack(battle, player, VINE_WHIP, scripted_rng(ints=[11]))
    assert battle.enemy_hp == 0
    assert player.exp == calculate_exp_gain(4) == 20
    assert battle.message == "Aquafi fainted! +20 XP"
    assert battle.message_ticks == 70
    assert not battle.awaiting_enemy_turn
    assert player.badges == 0

    outcomes = run_ticks(battle, player, scripted_rng(), 70)
    assert outcomes == [BattleOutcome.WON]
    assert battle.resolved


def test_knockout_can_trigger_level_up(scripted_rng):
    player = Player(exp=80, hp=10)
    battle = ready(wild_battle(player, enemy_hp=1, enemy_level=2))
    player_attack(battle, player, LEAF_SLASH, scripted_rng(ints=[5]))
    # 80 + 14 = 94 -> level 6 with 4 left
    assert (player.level, player.exp) == (6, 4)
    assert player.hp == player.max_hp
    assert battle.player_level == 6
    assert battle.player_hp == battle.player_max_hp == player.max_hp


def test_trainer_knockout_grants_badge(scripted_rng):
    player = Player()
    battle = ready(start_trainer_battle(player))
    battle.enemy_hp = 3
    player_attack(battle, player, LEAF_SLASH, scripted_rng(ints=[9]))
    assert player.badges == 1
    assert battle.outcome == BattleOutcome.WON


def test_enemy_turn_damage(player, scripted_rng):
    battle = wild_battle(player, enemy_level=5)
    battle.hold("", 0, BattlePhase.ENEMY_TURN)
    enemy_turn(battle, player, scripted_rng(ints=[4]))
    # 4 rolled + 5 // 2
    assert player.hp == 34 - 6
    assert battle.player_hp == player.hp
    assert battle.message == "Aquafi struck back! (-6)"
    assert battle.message_ticks == 55
    assert not battle.awaiting_enemy_turn


def test_enemy_turn_knocking_player_out_sends_them_home(scripted_rng):
    player = Player(hp=5, exp=40, x=14, y=8)
    battle = wild_battle(player, enemy_level=2)
    enemy_turn(battle, player, scripted_rng(ints=[4]))
    assert player.hp == player.max_hp
    assert player.position == RESPAWN_POSITION
    assert player.exp == 40
    assert player.badges == 0
    assert battle.player_hp == 0
    assert battle.outcome == BattleOutcome.LOST
    assert battle.message == "Leaflit fainted! You rushed to the nearest town."
    assert battle.message_ticks == 80
    assert run_ticks(battle, player, scripted_rng(), 80) == [BattleOutcome.LOST]


def test_trainer_loss_awards_nothing(scripted_rng):
    player = Player(hp=1)
    battle = ready(start_trainer_battle(player))
    enemy_turn(battle, player, scripted_rng(ints=[3]))
    assert battle.outcome == BattleOutcome.LOST
    assert player.badges == 0
    assert player.exp == 0


def test_potion_heals_and_costs_a_turn(scripted_rng):
    player = Player(hp=30)
    battle = ready(wild_battle(player))
    use_potion(battle, player, scripted_rng(ints=[14]))
    assert player.hp == player.max_hp
    assert battle.player_hp == player.max_hp
    assert battle.message == "You used a potion! (+14 HP)"
    assert battle.message_ticks == 45
    assert battle.awaiting_enemy_turn


def test_run_from_trainer_changes_only_the_message(player):
    battle = ready(start_trainer_battle(player))
    before = (battle.enemy_hp, battle.player_hp, player.hp, player.position)
    attempt_run(battle, random.Random(0))
    assert battle.message == "Can't run from a trainer battle!"
    assert battle.message_ticks == 45
    assert not battle.awaiting_enemy_turn
    assert battle.outcome is None
    assert (battle.enemy_hp, battle.player_hp, player.hp, player.position) == before

    run_ticks(battle, player, random.Random(0), 45)
    assert battle.accepts_input
    assert player.hp == before[2]


def test_run_success_and_failure(player, scripted_rng):
    battle = ready(wild_battle(player))
    attempt_run(battle, scripted_rng(randoms=[0.9]))
    assert battle.message == "Couldn't escape!"
    assert battle.awaiting_enemy_turn

    battle = ready(wild_battle(player))
    attempt_run(battle, scripted_rng(randoms=[0.54]))
    assert battle.message == "You escaped safely."
    assert battle.outcome == BattleOutcome.FLED
    assert player.hp == player.max_hp


def test_escape_rate_converges():
    rng = random.Random(2024)
    player = Player()
    trials = 20000
    escapes = 0
    for _ in range(trials):
        battle = ready(wild_battle(player))
        attempt_run(battle, rng)
        if battle.outcome == BattleOutcome.FLED:
            escapes += 1
    assert abs(escapes / trials - 0.55) < 0.02


def test_enemy_turn_fires_on_the_tick_after_the_hold_ends(player, scripted_rng):
    battle = ready(wild_battle(player, enemy_hp=30, enemy_level=2))
    player_attack(battle, player, LEAF_SLASH, scripted_rng(ints=[5]))
    rng = scripted_rng(ints=[3])

    run_ticks(battle, player, rng, 44)
    assert battle.phase == BattlePhase.MESSAGE
    assert player.hp == 34

    update_battle(battle, player, rng)
    assert battle.phase == BattlePhase.ENEMY_TURN
    assert battle.message_ticks == 0
    assert not handle_battle_action(battle, player, Control.ATTACK_1, rng)
    assert player.hp == 34

    update_battle(battle, player, rng)
    assert player.hp == 34 - 4
    assert battle.message_ticks == 55


def test_actions_are_ignored_while_a_message_is_held(player, scripted_rng):
    battle = start_wild_battle(player, scripted_rng(ints=[20, 2], choices=["Pyromite"]))
    assert not handle_battle_action(battle, player, Control.ATTACK_1, scripted_rng())
    assert battle.enemy_hp == 20


def test_handle_battle_action_dispatch(scripted_rng):
    player = Player(hp=20)
    battle = ready(wild_battle(player, enemy_hp=30))
    assert handle_battle_action(battle, player, Control.ATTACK_2, scripted_rng(ints=[7]))
    assert battle.enemy_hp == 30 - 9

    battle = ready(wild_battle(player))
    assert handle_battle_action(battle, player, Control.HEAL, scripted_rng(ints=[8]))
    assert player.hp == 28

    battle = ready(wild_battle(player))
    assert not handle_battle_action(battle, player, Control.INTERACT, scripted_rng())
    assert battle.accepts_input


def test_resolved_battle_stays_resolved(player, scripted_rng):
    battle = ready(wild_battle(player))
    attempt_run(battle, scripted_rng(randoms=[0.1]))
    outcomes = run_ticks(battle, player, scripted_rng(), 200)
    assert outcomes == [BattleOutcome.FLED]
    assert battle.resolved
    assert not battle.accepts_input
