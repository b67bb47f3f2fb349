# ============================================================================
# tegami/cli.py - CLI
# ============================================================================

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from . import create_gateway, create_message_processor, load_config, setup_logging
from .config import VALID_LOG_LEVELS
from .errors import TegamiError


def _serve(args: argparse.Namespace) -> int:
    try:
        config = load_config(host=args.host, port=args.port, log_level=args.log_level)
    except TegamiError as e:
        print(f"Error: {e}")
        return 1

    controller = create_gateway(config)
    logger = logging.getLogger("tegami")

    try:
        controller.start()
    except OSError as e:
        logger.error(f"Failed to start SMTP server on {config.address}: {e}")
        return 1

    logger.info(f"SMTP server listening on {config.address}")
    loop = asyncio.new_event_loop()
    try:
        loop.run_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        controller.stop()
        loop.close()
    return 0


def _process(args: argparse.Namespace) -> int:
    logger = setup_logging(getattr(logging, args.log_level or "WARNING"))
    processor = create_message_processor(logger)

    try:
        with open(args.file, "rb") as f:
            processed = processor.process(f)
    except (OSError, TegamiError) as e:
        print(f"Error: {e}")
        return 1

    result = {"html": processed.html, "markdown": processed.markdown}
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        print(f"Results saved to: {args.output}")
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Relay inbound mail to chat notification services")
    parser.add_argument("--log-level", type=str, default=None, choices=VALID_LOG_LEVELS,
                        help="Set logging level")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the SMTP gateway")
    serve.add_argument("--host", help="Listen host (default: TEGAMI_SMTP_HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Listen port (default: TEGAMI_SMTP_PORT or 2525)")
    serve.set_defaults(func=_serve)

    process = commands.add_parser("process", help="Convert a single .eml file and print both forms")
    process.add_argument("file", type=Path, help="Input email file (.eml)")
    process.add_argument("--output", type=Path, help="Output JSON file")
    process.set_defaults(func=_process)

    return parser


def main(argv=None) -> int:
    """Command line interface for the gateway."""
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())


# ============================================================================
# Usage Examples
# ============================================================================

"""
# Relay to a Telegram chat and a Discord channel:
export TEGAMI_TELEGRAM_BOT_TOKEN=123456:ABC...
export TEGAMI_TELEGRAM_CHAT_ID=-1001234567890
export TEGAMI_DISCORD_WEBHOOK_URL=https://discord.com/api/webhooks/...
tegami serve --port 2525

# Preview what a message would look like:
tegami process message.eml
"""
