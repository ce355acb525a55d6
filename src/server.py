"""Protean Engine runner for the storefront domain.

Only needed when events are processed asynchronously (PROTEAN_ENV=production):
the Engine consumes the broker and invokes event handlers such as the cart's
reaction to product stock changes.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from storefront.domain import storefront

    storefront.init()
    await Engine(storefront).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
