import pytest

import main
import network
import visualization


class FakeHost:
    def __init__(self, vis_params):
        self.canvas = object()
        self.closed = False
        FakeHost.instances.append(self)

    def close(self):
        self.closed = True


def test_host_is_closed_when_network_construction_fails(monkeypatch):
    FakeHost.instances = []

    def failing_network(*args, **kwargs):
        raise ValueError("bad parameters")

    monkeypatch.setattr(main, "load_config", lambda path: {"run_control": {"profile": False}})
    monkeypatch.setattr(main, "setup_logging", lambda config: None)
    monkeypatch.setattr(visualization, "PygameHost", FakeHost)
    monkeypatch.setattr(network, "ParticleNetwork", failing_network)

    with pytest.raises(ValueError):
        main.main()

    assert len(FakeHost.instances) == 1
    assert FakeHost.instances[0].closed


def test_missing_config_exits_before_opening_a_window(monkeypatch, capsys):
    FakeHost.instances = []

    def missing(path):
        raise FileNotFoundError(path)

    monkeypatch.setattr(main, "load_config", missing)
    monkeypatch.setattr(visualization, "PygameHost", FakeHost)

    main.main()

    assert "FATAL" in capsys.readouterr().out
    assert FakeHost.instances == []
