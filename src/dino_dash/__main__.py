"""
Entry point: python -m dino_dash
"""

import asyncio

from dino_dash.core.runtime.main_loop import MainLoop


def main():
    asyncio.run(MainLoop().run())


if __name__ == "__main__":
    main()
