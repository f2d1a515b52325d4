"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

from src.latecomers.latecomers import load_settings
from src.latecomers.latecomers.container import build_container


def main():
    settings = load_settings()
    container = build_container(settings=settings)
    try:
        result = container.ledger_service.mark_late("scanner-cse", "21045")
        print(result.notice.title, "-", result.notice.description)

        overview = container.ledger_service.fined_overview("scanner-cse")
        print(f"{len(overview.entries)} fined students, pending {container.policy.format_amount(overview.total_pending)}")
    finally:
        container.conn.close()


if __name__ == "__main__":
    main()
