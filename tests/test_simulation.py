"""Tests for antsiege.simulation — Match engine, errors and config loading."""

from pathlib import Path

import numpy as np
import pytest

from antsiege.__main__ import build_match
from antsiege.colony.ant import Boost, Eater, Guard, Thrower
from antsiege.colony.colony import Colony
from antsiege.hive.bee import Bee
from antsiege.hive.spawner import Spawner
from antsiege.simulation.config import DeploymentConfig, ScenarioConfig, WaveConfig
from antsiege.simulation.engine import Match, parse_coordinates
from antsiege.simulation.errors import MatchError

_DEFAULT_YAML = Path(__file__).resolve().parent.parent / "config" / "default.yaml"


def _single_tunnel_match(length: int = 1, food: int = 10) -> Match:
    rng = np.random.default_rng(0)
    colony = Colony(food=food, tunnel_count=1, tunnel_length=length, rng=rng)
    spawner = Spawner(attacker_armor=1, attacker_damage=1, rng=rng)
    return Match(colony=colony, spawner=spawner)


class TestParseCoordinates:
    """Tests for the "row,col" parser."""

    def test_valid(self) -> None:
        assert parse_coordinates("1,4") == (1, 4)
        assert parse_coordinates("0,12") == (0, 12)

    @pytest.mark.parametrize(
        "text",
        ["", "0", "0,1,2", "a,b", "1.5,0", "1_0,0", "+0,1", " 0,2", "0, 2", "-1,0"],
    )
    def test_malformed(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_coordinates(text)


class TestMatchOperations:
    """Tests for deploy, remove and boost through coordinate strings."""

    def test_deploy(self, small_match: Match) -> None:
        assert small_match.deploy("Thrower", "1,2") is None
        assert isinstance(small_match.grid[1][2].defender, Thrower)
        assert small_match.food == 46

    def test_deploy_unknown_type(self, small_match: Match) -> None:
        assert small_match.deploy("wasp", "0,0") is MatchError.UNKNOWN_UNIT_TYPE

    @pytest.mark.parametrize(
        "coords",
        ["", "x", "0,a", "2,0", "0,6", "-1,0", "0,-1", "0,1_0", "+0,0"],
    )
    def test_deploy_illegal_location(self, small_match: Match, coords: str) -> None:
        assert small_match.deploy("thrower", coords) is MatchError.ILLEGAL_LOCATION
        assert small_match.food == 50

    def test_deploy_insufficient_food(self) -> None:
        match = _single_tunnel_match(food=4)
        assert match.deploy("scuba", "0,0") is MatchError.INSUFFICIENT_RESOURCES

    def test_deploy_slot_occupied(self, small_match: Match) -> None:
        small_match.deploy("thrower", "0,0")
        assert small_match.deploy("eater", "0,0") is MatchError.SLOT_OCCUPIED
        assert small_match.deploy("guard", "0,0") is None
        assert small_match.deploy("guard", "0,0") is MatchError.SLOT_OCCUPIED

    def test_remove_outward_slot(self, small_match: Match) -> None:
        small_match.deploy("eater", "0,1")
        small_match.deploy("guard", "0,1")
        assert small_match.remove("0,1") is None
        assert isinstance(small_match.grid[0][1].defender, Eater)
        assert small_match.remove("0,1") is None
        assert small_match.grid[0][1].defender is None

    def test_remove_empty(self, small_match: Match) -> None:
        assert small_match.remove("0,1") is MatchError.NO_DEFENDER_AT_LOCATION

    def test_remove_illegal(self, small_match: Match) -> None:
        assert small_match.remove("9,9") is MatchError.ILLEGAL_LOCATION

    def test_apply_boost(self, small_match: Match) -> None:
        small_match.deploy("thrower", "0,0")
        assert small_match.apply_boost("Flight", "0,0") is None
        assert small_match.grid[0][0].defender.boost is Boost.FLIGHT
        assert small_match.available_boost_names() == ["stick", "freeze"]

    def test_apply_boost_errors(self, small_match: Match) -> None:
        small_match.deploy("thrower", "0,0")
        assert small_match.apply_boost("nectar", "0,0") is MatchError.UNKNOWN_BOOST
        assert small_match.apply_boost("spray", "0,0") is MatchError.BOOST_EXHAUSTED
        assert small_match.apply_boost("stick", "1,0") is (
            MatchError.NO_DEFENDER_AT_LOCATION
        )
        assert small_match.apply_boost("stick", "0;0") is MatchError.ILLEGAL_LOCATION

    def test_available_boosts_default(self, small_match: Match) -> None:
        assert small_match.available_boost_names() == ["flight", "stick", "freeze"]

    def test_error_messages(self) -> None:
        assert str(MatchError.INSUFFICIENT_RESOURCES) == "not enough food"
        assert len(set(MatchError)) == 7


class TestMatchTurns:
    """Tests for turn order and win/loss evaluation."""

    def test_take_turn_advances_counter(self, small_match: Match) -> None:
        small_match.take_turn()
        small_match.take_turn()
        assert small_match.turn == 2

    def test_single_thrower_scenario(self) -> None:
        match = _single_tunnel_match()
        assert match.deploy("thrower", "0,0") is None
        match.spawner.schedule_wave(0, 1)
        assert match.is_won() is None

        match.take_turn()
        # The wave lands at the end of turn 0
        assert match.spawner_pending_count == 0
        assert len(match.grid[0][0].attackers) == 1
        assert match.is_won() is None

        match.take_turn()
        assert match.grid[0][0].attackers == []
        assert match.is_won() is True

    def test_not_won_while_hive_has_bees(self) -> None:
        match = _single_tunnel_match()
        match.spawner.schedule_wave(5, 1)
        assert match.colony.all_attackers() == []
        assert match.is_won() is None

    def test_loss_takes_priority(self) -> None:
        match = _single_tunnel_match()
        match.colony.queen_location.add_attacker(Bee(armor=1, damage=1))
        assert match.is_won() is False
        match.spawner.schedule_wave(3, 4)
        assert match.is_won() is False

    def test_bee_reaches_queen(self) -> None:
        match = _single_tunnel_match(length=2)
        match.spawner.schedule_wave(0, 1)
        assert match.run(max_turns=10) is False
        assert match.turn == 3

    def test_run_stops_at_cap(self) -> None:
        match = _single_tunnel_match(length=2)
        match.spawner.schedule_wave(50, 1)
        assert match.run(max_turns=5) is None
        assert match.turn == 5

    def test_guarded_thrower_defends(self) -> None:
        match = _single_tunnel_match(length=3, food=20)
        match.deploy("thrower", "0,0")
        match.deploy("guard", "0,0")
        match.spawner.schedule_wave(0, 2)
        assert match.run(max_turns=10) is True
        assert isinstance(match.grid[0][0].defender, Guard)

    def test_phase_order_flood_after_combat(self) -> None:
        rng = np.random.default_rng(0)
        colony = Colony(
            food=10,
            tunnel_count=1,
            tunnel_length=1,
            flood_period=1,
            rng=rng,
        )
        match = Match(colony=colony, spawner=Spawner(1, 1, rng=rng))
        match.deploy("thrower", "0,0")
        colony.grid[0][0].add_attacker(Bee(armor=1, damage=1))
        match.take_turn()
        # The thrower still got its throw in before the water took it
        assert colony.all_attackers() == []
        assert colony.grid[0][0].defender is None


class TestScenarioConfig:
    """Tests for YAML config loading."""

    def test_defaults(self, default_config: ScenarioConfig) -> None:
        assert default_config.seed == 42
        assert default_config.tunnel_count == 3
        assert default_config.waves == []

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "scenario.yaml"
        yaml_file.write_text(
            "seed: 7\n"
            "tunnel_count: 2\n"
            "waves:\n"
            "  - {turn: 1, count: 3}\n"
            "deployments:\n"
            "  - {unit: thrower, at: '0,1', boost: stick}\n",
        )
        cfg = ScenarioConfig.from_yaml(yaml_file)
        assert cfg.seed == 7
        assert cfg.tunnel_count == 2
        assert cfg.tunnel_length == 8
        assert cfg.waves == [WaveConfig(turn=1, count=3)]
        assert cfg.deployments == [
            DeploymentConfig(unit="thrower", at="0,1", boost="stick"),
        ]

    def test_empty_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert ScenarioConfig.from_yaml(yaml_file) == ScenarioConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ScenarioConfig.from_yaml(tmp_path / "nope.yaml")

    def test_default_scenario_file(self) -> None:
        cfg = ScenarioConfig.from_yaml(_DEFAULT_YAML)
        assert cfg.tunnel_count == 3
        assert cfg.waves


class TestMatchFromConfig:
    """Tests for building and running matches from scenarios."""

    def test_from_config(self) -> None:
        cfg = ScenarioConfig(
            tunnel_count=2,
            tunnel_length=4,
            starting_food=9,
            waves=[WaveConfig(turn=0, count=2), WaveConfig(turn=3, count=1)],
        )
        match = Match.from_config(cfg)
        assert len(match.grid) == 2
        assert match.food == 9
        assert match.spawner_pending_count == 3
        assert match.turn == 0

    def test_from_config_rejects_empty_layout(self) -> None:
        cfg = ScenarioConfig.from_dict(
            {"tunnel_length": 0, "waves": [{"turn": 0, "count": 1}]},
        )
        with pytest.raises(ValueError):
            Match.from_config(cfg)

    def test_repr_names_the_hive(self) -> None:
        match = Match.from_config(ScenarioConfig(waves=[WaveConfig(turn=2, count=3)]))
        assert "Spawner(pending=3)" in repr(match)

    def test_build_match_applies_deployments(self) -> None:
        cfg = ScenarioConfig(
            starting_food=10,
            deployments=[
                DeploymentConfig(unit="thrower", at="0,1", boost="freeze"),
                DeploymentConfig(unit="dragon", at="0,2"),
                DeploymentConfig(unit="eater", at="1,1"),
            ],
        )
        match = build_match(cfg)
        assert match.grid[0][1].defender.boost is Boost.FREEZE
        assert match.grid[0][2].defender is None
        assert isinstance(match.grid[1][1].defender, Eater)
        assert match.food == 2

    def test_determinism(self) -> None:
        """Same seed must produce identical outcomes."""
        cfg = ScenarioConfig.from_yaml(_DEFAULT_YAML)

        def play() -> tuple[bool | None, int, int, list[str]]:
            match = build_match(cfg)
            outcome = match.run(cfg.max_turns)
            names = [
                bee.location.name
                for bee in match.colony.all_attackers()
            ]
            return outcome, match.turn, match.food, names

        assert play() == play()
