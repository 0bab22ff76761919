import argparse
import json

from portchecker.config import CFG, init_cfg_from_args, load_cfg_file

def test_defaults():
    cfg = load_cfg_file(None)
    assert cfg == CFG()
    assert cfg.settle_delay == 0.5

def test_yaml_file(tmp_path):
    p = tmp_path / "pc.yaml"
    p.write_text("lsof_path: /usr/sbin/lsof\nsettle_delay: 1.5\nbogus: 1\n", encoding="utf-8")
    cfg = load_cfg_file(str(p))
    assert cfg.lsof_path == "/usr/sbin/lsof"
    assert cfg.settle_delay == 1.5
    assert not hasattr(cfg, "bogus")

def test_json_file_and_cli_override(tmp_path):
    p = tmp_path / "pc.json"
    p.write_text(json.dumps({"elevation": "sudo", "list_timeout": 3}), encoding="utf-8")
    args = argparse.Namespace(config=str(p), lsof="/opt/bin/lsof", settle_delay=0.0, elevation=None)
    cfg = init_cfg_from_args(args)
    assert cfg.elevation == "sudo"
    assert cfg.list_timeout == 3
    assert cfg.lsof_path == "/opt/bin/lsof"
    assert cfg.settle_delay == 0.0

def test_missing_file_keeps_defaults(tmp_path, capsys):
    cfg = load_cfg_file(str(tmp_path / "nope.yaml"))
    assert cfg == CFG()
    assert "[warn]" in capsys.readouterr().out
