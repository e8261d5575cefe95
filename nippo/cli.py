"""CLI entry point for the daily report generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from dotenv import load_dotenv

from .catalog import RAMEN_DISPLAY_ORDER, RAMEN_KEYS, RAMEN_LABELS, SET_ALLOWED_KEYS
from .config import load_config
from .errors import ReportError
from .export import save_report
from .session import ReportSession
from .sources import read_rows


def _assignment(mode: str):
    """argparse type for "INDEX:KEY[:AMOUNT]" operator actions."""
    allowed = RAMEN_KEYS if mode == "plain" else SET_ALLOWED_KEYS

    def parse(value: str) -> tuple[str, int, str, int | None]:
        parts = value.split(":")
        if len(parts) not in (2, 3):
            raise argparse.ArgumentTypeError(
                f"INDEX:銘柄[:杯数] の形式で指定してください: {value!r}"
            )
        try:
            index = int(parts[0])
            amount = int(parts[2]) if len(parts) == 3 else None
        except ValueError:
            raise argparse.ArgumentTypeError(f"数値が不正です: {value!r}")
        key = parts[1]
        if key not in allowed:
            raise argparse.ArgumentTypeError(
                f"{key!r} は指定できません ({' / '.join(allowed)} から選択してください)"
            )
        return (mode, index, key, amount)

    return parse


def main(argv: list[str] | None = None) -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="nippo",
        description="POS の商品別・支払方法別エクスポートから日報テキストを生成します",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="設定ファイルのパス (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="詳細ログを表示"
    )

    sub = parser.add_subparsers(dest="command")

    # variants
    sub.add_parser("variants", help="ラーメン銘柄の一覧を表示")

    # report
    report_parser = sub.add_parser("report", help="CSV/Excel を解析して日報を出力")
    report_parser.add_argument("products", help="商品別 CSV/Excel")
    report_parser.add_argument("stats", help="支払方法別 CSV/Excel")
    report_parser.add_argument(
        "--shift-days", type=int, default=0, metavar="N",
        help="日付を N 日ずらす (前日は -1)",
    )
    report_parser.add_argument(
        "--assign", type=_assignment("plain"), action="append",
        dest="assignments", metavar="I:KEY[:N]",
        help="未振り分け I 番を通常の銘柄 KEY に N 杯振り分け",
    )
    report_parser.add_argument(
        "--assign-set", type=_assignment("set"), action="append",
        dest="assignments", metavar="I:KEY[:N]",
        help="未振り分け I 番を KEY のセットに振り分け",
    )
    report_parser.add_argument(
        "--assign-course", type=_assignment("course"), action="append",
        dest="assignments", metavar="I:KEY[:N]",
        help="未振り分け I 番を KEY のコースに振り分け",
    )
    report_parser.add_argument(
        "--assign-all", action="store_true",
        help="残りの未振り分けを一括でセット計上",
    )
    report_parser.add_argument(
        "--save", nargs="?", const="", default=None, metavar="DIR",
        help="summary_<日付>.txt に保存 (DIR 省略時は設定の output_dir)",
    )
    report_parser.add_argument("--json", action="store_true", help="JSON形式で出力")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"設定エラー: {e}", file=sys.stderr)
        sys.exit(1)

    match args.command:
        case "variants":
            _cmd_variants()
        case "report":
            _cmd_report(config, args)


def _cmd_variants() -> None:
    print(f"ラーメン銘柄: {len(RAMEN_DISPLAY_ORDER)} 種")
    for key in RAMEN_DISPLAY_ORDER:
        mark = " (セット/コース可)" if key in SET_ALLOWED_KEYS else ""
        print(f"  {key:<8} {RAMEN_LABELS[key]}{mark}")


def _cmd_report(config, args) -> None:
    try:
        product_rows = read_rows(args.products, config)
        stats_rows = read_rows(args.stats, config)
    except (FileNotFoundError, ValueError, ImportError) as e:
        print(f"読み込みエラー: {e}", file=sys.stderr)
        sys.exit(1)

    session = ReportSession(config)
    try:
        session.load(
            product_rows,
            stats_rows,
            stats_name=args.stats,
            product_name=args.products,
        )
    except (ReportError, ValueError) as e:
        print(f"エラー: {e}", file=sys.stderr)
        sys.exit(1)

    if args.shift_days:
        session.shift_date(args.shift_days)

    for mode, index, key, amount in args.assignments or []:
        if mode == "course":
            session.reassign_to_course(index, key, amount)
        else:
            session.reassign(index, key, as_set=(mode == "set"), amount=amount)

    if args.assign_all:
        moved = session.assign_all_to_default()
        if not moved:
            print("未振り分けの項目はありません。", file=sys.stderr)

    output = session.render()
    state = session.state

    if args.json:
        data = asdict(state)
        data["text"] = output
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        print(output)

    if state.unassigned:
        print(
            f"\n⚠ 要振り分け候補（未計上）: {len(state.unassigned)}件",
            file=sys.stderr,
        )
        for i, item in enumerate(state.unassigned):
            print(f"  [{i}] {item.name} × {item.count}", file=sys.stderr)

    if args.save is not None:
        output_dir = args.save or config.report.output_dir
        path = save_report(output, state.date, output_dir)
        print(f"💾 保存しました: {path}", file=sys.stderr)
