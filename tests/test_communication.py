"""Event channel, console renderer and markdown log tests."""

import io

from rich.console import Console

from bang_dice.agents.controller import ScriptedController
from bang_dice.communication.channels import EventChannel, EventKind, GameEvent
from bang_dice.communication.console_renderer import ConsoleRenderer
from bang_dice.communication.markdown_logger import MarkdownLogger
from bang_dice.engine.game import Game, GameConfig
from bang_dice.engine.player import Player
from bang_dice.engine.roles import Faction, Role

from helpers import ALL_HELD, NEAR, Recorder, ScriptedDice


# ── Channel ─────────────────────────────────────────────────────────────────

class TestEventChannel:

    def test_emit_records_and_broadcasts(self):
        channel = EventChannel()
        recorder = Recorder()
        channel.subscribe(recorder)
        player = Player(name="Jesse", role=Role.OUTLAW)

        event = channel.emit(EventKind.ARROW, "Jesse gains an arrow!", turn=2, player=player)

        assert event == GameEvent(kind=EventKind.ARROW, message="Jesse gains an arrow!", turn=2, player="Jesse")
        assert channel.events == [event]
        assert recorder.events == [event]

    def test_subscribe_twice_delivers_once(self):
        channel = EventChannel()
        recorder = Recorder()
        channel.subscribe(recorder)
        channel.subscribe(recorder)
        channel.emit(EventKind.SETUP, "hello")
        assert len(recorder.events) == 1

    def test_unsubscribe(self):
        channel = EventChannel()
        recorder = Recorder()
        channel.subscribe(recorder)
        channel.unsubscribe(recorder)
        channel.emit(EventKind.SETUP, "hello")
        assert recorder.events == []

    def test_player_status_goes_to_observers_only(self):
        channel = EventChannel()
        recorder = Recorder()
        channel.subscribe(recorder)
        channel.player_status(Player(name="Wyatt", role=Role.SHERIFF))
        assert recorder.statuses == [("Wyatt", 10, 0)]
        assert channel.events == []

    def test_filters(self):
        channel = EventChannel()
        channel.emit(EventKind.ROLL, "a", turn=1)
        channel.emit(EventKind.HEAL, "b", turn=1)
        channel.emit(EventKind.ROLL, "c", turn=2)
        assert [e.message for e in channel.get_events(kind=EventKind.ROLL)] == ["a", "c"]
        assert [e.message for e in channel.get_events(turn=1)] == ["a", "b"]
        assert [e.message for e in channel.get_events(EventKind.ROLL, 2)] == ["c"]
        channel.clear()
        assert channel.get_events() == []


# ── Console ─────────────────────────────────────────────────────────────────

class TestConsoleRenderer:

    def make_renderer(self, reveal_roles=False):
        output = io.StringIO()
        console = Console(file=output, width=120, color_system=None)
        return ConsoleRenderer(console, reveal_roles=reveal_roles), output

    def test_prints_event_messages(self):
        renderer, output = self.make_renderer()
        renderer.render_event(GameEvent(kind=EventKind.DAMAGE, message="Jesse takes 1 damage"))
        assert "Jesse takes 1 damage" in output.getvalue()

    def test_turn_start_is_a_rule(self):
        renderer, output = self.make_renderer()
        renderer.render_event(
            GameEvent(kind=EventKind.TURN_START, message="Current Player: Jesse", turn=4, player="Jesse")
        )
        assert "Turn 4: Jesse" in output.getvalue()

    def test_hidden_roles(self):
        renderer, output = self.make_renderer()
        renderer.render_player_status(Player(name="Jesse", role=Role.OUTLAW))
        renderer.render_player_status(Player(name="Wyatt", role=Role.SHERIFF))
        text = output.getvalue()
        assert "Jesse - ? - 8/8" in text
        assert "Wyatt - Sheriff - 10/10" in text

    def test_dead_players_are_revealed(self):
        renderer, output = self.make_renderer()
        jesse = Player(name="Jesse", role=Role.OUTLAW)
        jesse.life = 0
        renderer.render_player_status(jesse)
        assert "Outlaw" in output.getvalue()

    def test_reveal_roles(self):
        renderer, output = self.make_renderer(reveal_roles=True)
        renderer.render_player_status(Player(name="Billy", role=Role.RENEGADE))
        assert "Renegade" in output.getvalue()


# ── Markdown log ────────────────────────────────────────────────────────────

class TestMarkdownLogger:

    def test_start_game_writes_header(self, tmp_path):
        logger = MarkdownLogger(base_dir=str(tmp_path))
        game_dir = logger.start_game("game_test")
        assert game_dir == tmp_path / "game_test"
        content = (game_dir / "game_state.md").read_text()
        assert content.startswith("# Bang! Dice Game - game_test")

    def test_events_before_start_are_ignored(self, tmp_path):
        logger = MarkdownLogger(base_dir=str(tmp_path))
        logger.render_event(GameEvent(kind=EventKind.ROLL, message="rolled"))
        logger.log_game_end(Faction.LAW, [])
        assert list(tmp_path.iterdir()) == []

    def test_setup_events_and_end(self, tmp_path):
        logger = MarkdownLogger(base_dir=str(tmp_path))
        logger.start_game("game_test")
        players = [Player(name="Wyatt", role=Role.SHERIFF), Player(name="Jesse", role=Role.OUTLAW)]
        players[1].life = 0

        logger.log_setup(players)
        logger.render_event(GameEvent(kind=EventKind.TURN_START, message="x", turn=1, player="Wyatt"))
        logger.render_event(GameEvent(kind=EventKind.SHOT, message="Wyatt shoots Jesse", turn=1))
        logger.render_event(GameEvent(kind=EventKind.DEATH, message="Jesse died!", turn=1))
        logger.render_player_status(players[1])
        logger.log_game_end(Faction.LAW, players)

        content = logger.game_file.read_text()
        assert "| 1 | Wyatt | Sheriff | 10 |" in content
        assert "## Turn 1 - Wyatt" in content
        assert "- Wyatt shoots Jesse" in content
        assert "### Death" in content
        assert "*(dead)*" in content
        assert "## Winner: LAW" in content
        assert "- Wyatt (Sheriff)" in content
        assert "| Jesse | Outlaw | 0/8 | No |" in content

    def test_game_logs_itself(self, tmp_path):
        logger = MarkdownLogger(base_dir=str(tmp_path))
        controller = ScriptedController(holds=[ALL_HELD] * 2, strict=True)
        game = Game(
            GameConfig(player_count=4),
            controller,
            logger=logger,
            rng=ScriptedDice([NEAR] * 5),
        )
        game.setup_players([Role.SHERIFF, Role.OUTLAW, Role.OUTLAW, Role.RENEGADE])
        for p in game.players[1:3]:
            p.life = 0
        game.players[3].life = 1

        assert game.run() == Faction.LAW

        content = logger.game_file.read_text()
        assert "## Turn 1 - Player 1" in content
        assert "Game over! The Law wins!" in content
        assert "# GAME OVER" in content
