from __future__ import annotations
import argparse, json, logging, sys
from typing import Optional, Sequence

from .aggregate import Aggregator
from .binary.errors import ParseError
from .binary.reader import aggregate_log, iter_records
from .config import CountPolicy, DecoderSettings, UnknownKindPolicy, load_settings
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _settings(args) -> DecoderSettings:
    base = load_settings()
    update = {}
    if args.count_policy:
        update["count_policy"] = CountPolicy(args.count_policy)
    if args.lenient:
        update["on_unknown_kind"] = UnknownKindPolicy.STOP
    if args.log_level:
        update["log_level"] = args.log_level
    return base.model_copy(update=update)


def _fmt(amount) -> str:
    return f"${amount:,.2f}"


def cmd_summary(args, settings: DecoderSettings) -> int:
    agg = Aggregator()
    try:
        header, result = aggregate_log(args.input, aggregator=agg, settings=settings)
    except ParseError as e:
        print(
            f"error: {type(e).__name__} at offset {e.offset}: {e} "
            f"(processed {agg.records_processed} records before failure)",
            file=sys.stderr,
        )
        return 1

    print(f"version={header.version} declared_records={header.declared_record_count} "
          f"decoded_records={result.records_processed}")
    print(f"total credit amount={_fmt(result.total_credits)}")
    print(f"total debit amount={_fmt(result.total_debits)}")
    print(f"autopays started={result.autopay_starts}")
    print(f"autopays ended={result.autopay_ends}")
    for uid in args.user or []:
        bal = result.balance_for(uid)
        if bal is None:
            print(f"balance for user {uid}=unknown user")
        else:
            print(f"balance for user {uid}={_fmt(bal)}")
    return 0


def cmd_records(args, settings: DecoderSettings) -> int:
    try:
        for rec in iter_records(args.input, settings=settings):
            print(json.dumps(rec.model_dump(mode="json")))
    except ParseError as e:
        print(f"error: {type(e).__name__} at offset {e.offset}: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_to_json(args, settings: DecoderSettings) -> int:
    try:
        header, result = aggregate_log(args.input, settings=settings)
    except ParseError as e:
        print(f"error: {type(e).__name__} at offset {e.offset}: {e}", file=sys.stderr)
        return 1
    doc = {
        "header": {"version": header.version, "declared_record_count": header.declared_record_count},
        "aggregate": result.model_dump(mode="json"),
    }
    with open(args.output, "w", encoding="utf-8") as out:
        json.dump(doc, out, indent=2)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mps7", description="MPS7 transaction log utilities")
    p.add_argument("--count-policy", choices=[c.value for c in CountPolicy], default=None,
                   help="How to treat the header's record count (default: advisory)")
    p.add_argument("--lenient", action="store_true",
                   help="Stop at an unknown record kind instead of failing")
    p.add_argument("--log-level", default=None, type=str.upper,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                   help="Logging level (default: INFO)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("summary", help="print totals, autopay counts and user balances")
    sp.add_argument("input", help="Path to MPS7 log")
    sp.add_argument("--user", type=int, action="append", help="User id to report a balance for (repeatable)")
    sp.set_defaults(func=cmd_summary)

    sp = sub.add_parser("records", help="print decoded records as JSON lines")
    sp.add_argument("input")
    sp.set_defaults(func=cmd_records)

    sp = sub.add_parser("to-json", help="write header and aggregates as JSON")
    sp.add_argument("input")
    sp.add_argument("output")
    sp.set_defaults(func=cmd_to_json)

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    settings = _settings(ns)
    setup_logging(settings.log_level)
    return ns.func(ns, settings)


if __name__ == "__main__":
    raise SystemExit(main())
