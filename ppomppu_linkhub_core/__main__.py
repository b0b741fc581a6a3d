import argparse
import asyncio
import sys
from typing import List, Optional

from ppomppu_linkhub_core import PpomppuLinkhubCore
from ppomppu_linkhub_core.errors import ConfigurationError
from ppomppu_linkhub_core.presets import Mode
from ppomppu_linkhub_core.utils.logger import get_logger

logger = get_logger(logger_level="INFO")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ppomppu-linkhub",
        description="爬取뽐뿌看板並註冊到 linkhub",
    )
    parser.add_argument("mode", nargs="?", choices=[m.value for m in Mode], help="爬蟲模式")
    parser.add_argument("--all", action="store_true", help="依序執行全部模式")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.all and not args.mode:
        build_parser().error("需要指定模式或 --all")

    core = PpomppuLinkhubCore()
    try:
        core.load_settings()
    except ConfigurationError as e:
        logger.error(f"❌ {e.message}")
        return 1

    if args.all:
        asyncio.run(core.run_all())
    else:
        asyncio.run(core.run(args.mode))
    return 0


if __name__ == "__main__":
    sys.exit(main())
