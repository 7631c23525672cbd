import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from baseball_stats_agent.app_config import (
    AppConfig,
    load_json_config,
    parse_app_config,
    resolve_runtime_env,
)
from baseball_stats_agent.bootstrap import bootstrap_runtime, build_database
from baseball_stats_agent.logging_config import setup_logging
from baseball_stats_agent.selftest import run_self_test

_USER_PROMPT = "you> "


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="baseball-stats-agent",
        description="Ask baseball statistics questions answered from the Lahman database.",
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="run the offline database tool checks and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="path to config.json (default: ./config.json)",
    )
    return parser.parse_args(argv)


def prompt_for_api_key(current: str) -> str:
    if current:
        return current
    try:
        return input("Enter your Anthropic API key: ").strip()
    except (EOFError, KeyboardInterrupt):
        return ""


def _print_banner(app: AppConfig, log_descriptions: list[str]) -> None:
    active = app.models.resolve(app.model_key)
    print("Baseball Stats Assistant")
    print("Ask questions about MLB statistics!")
    if active is not None:
        print(f"Current model: {active.key.upper()} ({active.description})")
    model_commands = ", ".join(f"'model {k}'" for k in app.models.keys())
    print(f"Commands: 'quit', 'clear', 'usage', {model_commands}, 'help'")
    if log_descriptions:
        print(f"Logging: {', '.join(log_descriptions)}")
    print()


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    load_dotenv()

    env = resolve_runtime_env()
    config = load_json_config(args.config)
    try:
        app = parse_app_config(config, env)
    except ValueError as ex:
        print(f"Invalid configuration: {ex}")
        return 1

    log_descriptions = setup_logging(level=app.log_level, consumers=app.log_consumers)

    if args.test:
        passed = await asyncio.to_thread(run_self_test, build_database(app))
        return 0 if passed else 1

    api_key = prompt_for_api_key(env.anthropic_api_key)
    if not api_key:
        print("API key is required.")
        return 1

    runtime = bootstrap_runtime(app, api_key)
    session = runtime.session
    logger.info(f"Session started with model {session.context.active_model.model_id}")
    _print_banner(app, log_descriptions)

    while True:
        try:
            user_input = input(_USER_PROMPT)
        except (EOFError, KeyboardInterrupt):
            break

        try:
            if not await session.handle_input(user_input):
                break
        except Exception as ex:
            logger.error(f"Unhandled error: {ex}")

    print("Goodbye!")
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
