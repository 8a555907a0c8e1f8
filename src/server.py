"""Protean Engine runner for the Storefront domain.

Only needed when event processing is asynchronous (the ``production``
overlay): the Engine delivers ``TicketIssued`` and the other domain events
to their handlers, e.g. the purchase receipt mailer.

Usage:
    python src/server.py
    python src/server.py --test-mode   # Drain pending messages and exit
"""

import argparse

from protean.server.engine import Engine


def _get_domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def main():
    parser = argparse.ArgumentParser(description="Storefront Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    engine = Engine(_get_domain(), test_mode=args.test_mode)
    engine.run()


if __name__ == "__main__":
    main()
