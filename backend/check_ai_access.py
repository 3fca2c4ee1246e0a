"""
One-off script: checks that the Anthropic key in .env works with the
model used for insights.

Run:  python3 check_ai_access.py
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

api_key = os.getenv("ANTHROPIC_API_KEY")
if not api_key:
    print("ERROR: ANTHROPIC_API_KEY not set in .env")
    sys.exit(1)

import anthropic

from sitelens.config import get_settings

MODEL = os.getenv("INSIGHTS_MODEL") or get_settings().insights_model


async def main():
    print(f"Found API key: {api_key[:8]}...")
    print(f"Testing model: {MODEL}")

    client = anthropic.AsyncAnthropic(api_key=api_key)
    try:
        msg = await client.messages.create(
            model=MODEL,
            max_tokens=1024,
            messages=[{"role": "user", "content": "Hello, are you functional?"}],
        )
    except anthropic.NotFoundError:
        print("FAILED: model not found. Check INSIGHTS_MODEL.")
        sys.exit(1)
    except anthropic.AuthenticationError:
        print("FAILED: unauthorized. Check ANTHROPIC_API_KEY.")
        sys.exit(1)
    except anthropic.APIError as e:
        print(f"FAILED: {e}")
        sys.exit(1)

    text = msg.content[0].text if msg.content and msg.content[0].type == "text" else "No text content"
    print("Success! Anthropic responded:")
    print(text)


asyncio.run(main())
