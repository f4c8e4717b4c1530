import run
from radiance.core.input import Key, KeyEvent
from radiance.core.view import DialogView, MapView, StartScreenView


class FakeScreen:
    """Replays scripted events; records every view drawn."""

    def __init__(self, events):
        self.events = list(events)
        self.drawn = []

    def draw(self, view):
        self.drawn.append(view)

    def read_event(self, timeout_ms):
        return self.events.pop(0)


def test_game_loop_runs_until_exit_confirmed(game):
    registry, state = game
    screen = FakeScreen([
        KeyEvent(Key.ENTER),
        None,
        KeyEvent(Key.ESC),
        KeyEvent(Key.RIGHT),
        KeyEvent(Key.ENTER),
    ])
    run.game_loop(screen, registry, state)
    assert state.do_exit
    assert not screen.events
    assert isinstance(screen.drawn[0], StartScreenView)
    assert isinstance(screen.drawn[1], MapView)
    assert isinstance(screen.drawn[-1], DialogView)
    # initial render plus one per handled event, the exit decision included
    assert len(screen.drawn) == 6


def test_game_loop_renders_the_exit_decision(game):
    registry, state = game
    screen = FakeScreen([KeyEvent(Key.ENTER), KeyEvent(Key.ESC), KeyEvent(Key.RIGHT), KeyEvent(Key.ENTER)])
    run.game_loop(screen, registry, state)
    assert state.do_exit
    assert len(screen.drawn) == 5
    last = screen.drawn[-1]
    assert isinstance(last, DialogView)
    assert last.selected == 1
    assert not state.needs_render


def test_main_reports_configuration_errors(tmp_path, capsys):
    code = run.main(["--config-path", str(tmp_path / "missing"), "--log-file", str(tmp_path / "rad.log")])
    assert code == 1
    assert "[CONFIG ERROR]" in capsys.readouterr().err
