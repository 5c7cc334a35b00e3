"""CLI for PoolPass — generate, score, pool, config (show/set)."""

import argparse
import sys

from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .charsets import Category, category_names, parse_categories
from .config import DEFAULTS, config_path, config_to_generator, load_config, save_config
from .evaluator import evaluate, pool_entropy
from .generator import (
    MAX_LENGTH,
    MIN_LENGTH,
    EmptyPoolError,
    PoolPassError,
    build_pool,
    generate_password,
)

EXIT_ERROR = 2

# passwords may contain ":name:" or "[...]" sequences; print them literally
console = Console(emoji=False, highlight=False)

def _setup_logging(level: str) -> None:
    logger.enable("poolpass")
    logger.remove()
    # resolve sys.stderr per message so redirected streams are honoured
    logger.add(lambda msg: sys.stderr.write(msg), level=level.upper())

def _fail(message: str) -> int:
    logger.error(message)
    console.print(f"[red]{escape(message)}[/red]")
    return EXIT_ERROR

def _disabled(args) -> Category:
    off = Category(0)
    if args.no_upper:
        off |= Category.UPPERCASE
    if args.no_lower:
        off |= Category.LOWERCASE
    if args.no_digits:
        off |= Category.NUMBERS
    if args.no_symbols:
        off |= Category.SYMBOLS
    return off

def _generator_config(args, cfg):
    enabled = parse_categories(cfg.get("categories", DEFAULTS["categories"]))
    return config_to_generator(
        cfg,
        categories=Category(enabled.value & ~_disabled(args).value),
        exclude_ambiguous=True if args.exclude_ambiguous else None,
        length=args.length,
    )

def cmd_generate(args, cfg) -> int:
    if args.copies < 1:
        raise ValueError("copies must be at least 1")
    gen_cfg = _generator_config(args, cfg)
    unbiased = args.unbiased or bool(cfg.get("unbiased", False))
    for i in range(args.copies):
        pw = generate_password(gen_cfg, unbiased=unbiased)
        result = evaluate(pw, gen_cfg.categories)
        console.print(
            f"[bold green]Password #{i+1}:[/bold green] {escape(pw)}  "
            f"[dim]({result['score']}/100 — {result['label']})[/dim]",
            soft_wrap=True,
        )
    return 0

def cmd_score(args, cfg) -> int:
    categories = parse_categories(args.categories.split(","))
    result = evaluate(args.password, categories)
    header = f"Score: {result['score']} / 100 — {result['label']}"
    classes = ", ".join(result["classes"]) or "none"
    body = (
        f"Length: {result['length']}\n"
        f"Enabled classes used: {classes}"
    )
    console.print(Panel(body, title=header))
    return 0

def cmd_pool(args, cfg) -> int:
    gen_cfg = _generator_config(args, cfg)
    pool = build_pool(gen_cfg.categories, gen_cfg.exclude_ambiguous)
    if not pool:
        return _fail(str(EmptyPoolError()))
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Categories")
    table.add_column("Pool size", justify="right")
    table.add_column(f"Entropy @ {gen_cfg.length} chars", justify="right")
    table.add_row(
        ", ".join(category_names(gen_cfg.categories)),
        str(len(pool)),
        f"{pool_entropy(pool, gen_cfg.length):.1f} bits",
    )
    console.print(table)
    console.print(escape(pool), soft_wrap=True)
    return 0

# Config subcommands

def cmd_config_show(args, cfg) -> int:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Key")
    table.add_column("Value")
    for key in DEFAULTS:
        value = cfg.get(key)
        if isinstance(value, list):
            value = ",".join(value)
        table.add_row(key, escape(str(value)))
    console.print(table)
    console.print(f"[dim]{escape(config_path())}[/dim]")
    return 0

def _parse_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Expected a boolean, got {value!r}")

def cmd_config_set(args, cfg) -> int:
    key, value = args.key, args.value
    if key == "length":
        new_value = int(value)
    elif key == "categories":
        new_value = category_names(parse_categories(value.split(",")))
    elif key in ("exclude_ambiguous", "unbiased"):
        new_value = _parse_bool(value)
    elif key == "log_level":
        new_value = value.upper()
    else:
        return _fail(f"Unknown config key: {key}")
    updated = dict(cfg)
    updated[key] = new_value
    # reject settings that would not build a valid generator
    config_to_generator(updated)
    save_config(updated)
    console.print(f"[green]Set {key}[/green] = {escape(str(new_value))}")
    return 0

def _add_pool_flags(p) -> None:
    p.add_argument("--length", type=int, default=None,
                   help=f"Password length ({MIN_LENGTH}-{MAX_LENGTH})")
    p.add_argument("--no-symbols", action="store_true", help="Disable symbols")
    p.add_argument("--no-upper", action="store_true", help="Disable uppercase")
    p.add_argument("--no-lower", action="store_true", help="Disable lowercase")
    p.add_argument("--no-digits", action="store_true", help="Disable digits")
    p.add_argument("--exclude-ambiguous", action="store_true",
                   help="Drop look-alike characters (l, 1, I, o, O, 0)")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="poolpass")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    _add_pool_flags(gen)
    gen.add_argument("--unbiased", action="store_true",
                     help="Use rejection sampling instead of modulo reduction")
    gen.add_argument("--copies", type=int, default=1, help="How many passwords to generate")
    gen.set_defaults(func=cmd_generate)

    sc = sub.add_parser("score", help="Score a password")
    sc.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    sc.add_argument("--categories", type=str, default=",".join(category_names(Category.ALL)),
                    help="Comma-separated enabled categories")
    sc.set_defaults(func=cmd_score)

    pl = sub.add_parser("pool", help="Show the effective character pool")
    _add_pool_flags(pl)
    pl.set_defaults(func=cmd_pool)

    c = sub.add_parser("config", help="Settings operations")
    csub = c.add_subparsers(dest="ccmd", required=True)

    c_show = csub.add_parser("show", help="Show current settings")
    c_show.set_defaults(func=cmd_config_show)

    c_set = csub.add_parser("set", help="Change a setting")
    c_set.add_argument("key", type=str, help="Setting name")
    c_set.add_argument("value", type=str, help="New value")
    c_set.set_defaults(func=cmd_config_set)

    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger.enable("poolpass")
    cfg = load_config()
    try:
        _setup_logging(args.log_level or cfg.get("log_level", "WARNING"))
        return args.func(args, cfg)
    except (PoolPassError, ValueError) as e:
        return _fail(str(e))

if __name__ == "__main__":
    sys.exit(main())
