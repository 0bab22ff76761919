from __future__ import annotations
import argparse, logging, sys
from .config import init_cfg_from_args
from .collectors import LsofSource
from .models import ListingFilter
from .registry import fetch_records, validate_port
from .errors import InvalidInput
from .session import PortChecker
from .web import create_app
from .web.app import dumps

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description='Find which processes hold a port and kill them')
    ap.add_argument('--listen-port', type=int, default=8766)
    ap.add_argument('--config', type=str, default=None, help='YAML or JSON file with CFG keys')
    ap.add_argument('--lsof', type=str, default=None, help='path to the lsof binary')
    ap.add_argument('--settle-delay', type=float, default=None, help='seconds to wait before re-listing after a kill')
    ap.add_argument('--elevation', choices=['auto', 'osascript', 'pkexec', 'sudo', 'none'], default=None)
    ap.add_argument('--dump', metavar='PORT|all', default=None, help='print one listing as JSON and exit')
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap.parse_args(argv)

def dump(cfg, what: str) -> int:
    if what == 'all':
        flt = ListingFilter.all_listening()
    else:
        try:
            flt = ListingFilter.single_port(validate_port(what))
        except InvalidInput:
            print(f"[warn] invalid port: {what!r}", file=sys.stderr)
            return 2
    records = fetch_records(LsofSource(cfg), flt)
    print(dumps([r.to_dict() for r in records]))
    return 0

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    cfg = init_cfg_from_args(args)

    if args.dump:
        return dump(cfg, args.dump)

    checker = PortChecker.from_cfg(cfg)
    app = create_app(cfg, checker)
    print(f"[*] lsof: {cfg.lsof_path}, elevation: {checker.controller.executor.name}")
    print(f"[*] Serving on http://localhost:{args.listen_port}")
    app.run(host='127.0.0.1', port=args.listen_port, debug=False, use_reloader=False)
    return 0

if __name__ == '__main__':
    sys.exit(main())
