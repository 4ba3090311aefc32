#!/usr/bin/env python3
"""
Manual smoke test for loguru2telegram.

Before running:
1. Set environment variables:
   export TELEGRAM_BOT_TOKEN="your_bot_token_here"
   export TELEGRAM_CHAT_ID="your_chat_id_here"      # or "id1,id2"

2. Or pass them directly to the script:
   python test_telegram_hook.py --token YOUR_TOKEN --chat-id YOUR_CHAT_ID --chat-id OTHER_CHAT_ID
"""

import argparse
import sys

from loguru import logger

from loguru2telegram import ConfigError, TelegramHook, TextFormatter


def main():
    parser = argparse.ArgumentParser(description='Test loguru2telegram hook')
    parser.add_argument('--token', help='Bot token (or set TELEGRAM_BOT_TOKEN env var)')
    parser.add_argument('--chat-id', action='append', help='Chat ID, repeatable (or set TELEGRAM_CHAT_ID env var)')
    parser.add_argument('--timeout', type=float, default=3.0, help='Per-request timeout in seconds')
    args = parser.parse_args()
    if bool(args.token) != bool(args.chat_id):
        parser.error('--token and --chat-id must be given together (or neither, to use env vars)')

    options = {
        "levels": ["INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
        "notify_on": ["ERROR", "CRITICAL"],
        "format": TextFormatter(disable_timestamp=True),
        "request_timeout": args.timeout,
    }

    try:
        logger.info("🤖 Creating Telegram hook...")
        if args.token and args.chat_id:
            hook = TelegramHook(args.token, args.chat_id, **options)
        else:
            hook = TelegramHook.from_env(**options)
    except ConfigError as e:
        logger.error(f"❌ Configuration error: {e}")
        logger.info("Make sure to set TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID or pass --token and --chat-id")
        sys.exit(1)

    handler_id = hook.attach(logger, catch=False)
    try:
        # Silent: INFO is not in notify_on
        logger.info("🚀 Hello from loguru2telegram! This message arrives silently.")
        logger.bind(job="smoke-test", attempt=1).warning("Structured fields are appended to the text")
        # Notifies
        logger.error("🔔 This one should ring.")
        # Not enabled, never sent
        logger.debug("You should not see this in Telegram")
    except Exception as e:
        logger.remove(handler_id)
        logger.error(f"❌ Delivery failed: {e}")
        sys.exit(1)

    logger.remove(handler_id)
    logger.info("🎉 All messages sent! Check your Telegram chat(s).")


if __name__ == "__main__":
    main()
