"""
速成查字命令行工具
"""

import argparse
import sys

from sucheng.engine.config import Scheme

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _run_practice(targets, stream, randomize: bool = False, rng=None) -> int:
    """
    依次练习多段文本

    从输入流逐行读取输入框内容，一段完成后接着练下一段；
    输入流结束时仍未完成则返回 1
    """
    from dataclasses import replace
    from sucheng.engine import create_initial_state, advance, summarize, count_han, shuffle

    passages = list(targets)
    if randomize:
        shuffle(passages, rng)

    lines = iter(stream)
    for target in passages:
        total = count_han(target)
        state = create_initial_state()
        print(f"练习: {target}")
        for line in lines:
            state = advance(replace(state, user_input=line.rstrip("\n")), target)
            print(f"{state.completed_chars}/{total} 错误 {state.total_errors}")
            if state.is_completed:
                summary = summarize(state, target)
                print(f"完成！速度 {summary.cpm} 字/分鐘 | 准确率 {summary.accuracy}% | 用时 {summary.elapsed_seconds}s")
                break
        if not state.is_completed:
            return 1
    return 0


def main(argv=None):
    """命令行入口"""
    parser = argparse.ArgumentParser(
        prog="sucheng",
        description="速成查字 - 仓颉 / 速成拆码与打字练习",
    )

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    server_parser = subparsers.add_parser("server", help="启动 API 服务")
    server_parser.add_argument("--host", default="0.0.0.0", help="绑定地址 (默认: 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=3000, help="端口 (默认: 3000)")
    server_parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default="INFO", help="日志级别")

    lookup_parser = subparsers.add_parser("lookup", help="查字拆码")
    lookup_parser.add_argument("text", help="要查的字")
    lookup_parser.add_argument("-s", "--scheme", choices=Scheme.ALL, default=Scheme.QUICK, help="输入法方案")
    lookup_parser.add_argument("-m", "--mapping", default=None, help="字码表路径")
    lookup_parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default="WARNING", help="日志级别")

    practice_parser = subparsers.add_parser("practice", help="打字练习（从标准输入读取输入框内容）")
    practice_parser.add_argument("targets", nargs="+", help="练习文本，可给多段")
    practice_parser.add_argument("--shuffle", action="store_true", help="打乱练习顺序")

    subparsers.add_parser("version", help="显示版本")

    args = parser.parse_args(argv)

    if args.command == "server":
        import os
        os.environ["HOST"] = args.host
        os.environ["PORT"] = str(args.port)
        os.environ["LOG_LEVEL"] = args.log_level
        from sucheng.api.server import main as server_main
        server_main()

    elif args.command == "lookup":
        from sucheng.engine import create_engine, EngineConfig
        config = EngineConfig(scheme=args.scheme, log_level=args.log_level)
        engine = create_engine(config, mapping_path=args.mapping)
        result = engine.lookup(args.text, remember=False)
        for item in result.results:
            print(f"{item.char}\t{item.parts or '-'}")

    elif args.command == "practice":
        sys.exit(_run_practice(args.targets, sys.stdin, randomize=args.shuffle))

    elif args.command == "version":
        from sucheng import __version__
        print(f"sucheng v{__version__}")

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
