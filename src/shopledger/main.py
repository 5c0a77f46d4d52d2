from __future__ import annotations

import logging

from shopledger.application.container import build_container
from shopledger.config import get_app_paths, load_settings
from shopledger.logging_config import setup_logging
from shopledger.ui.app import App


def main() -> None:
    paths = get_app_paths()
    setup_logging(paths.logs_dir, level=logging.INFO)

    container = build_container(paths.db_path, load_settings())

    app = App(
        ledger_service=container.ledger,
        fx_service=container.fx,
        reporting_service=container.reporting,
        db_path=str(paths.db_path),
        logs_dir=str(paths.logs_dir),
    )
    app.mainloop()


if __name__ == "__main__":
    main()
