from unittest.mock import AsyncMock, patch

import run


def test_main_sets_up_logging_and_tables():
    with patch("run.setup_logging") as setup_logging_mock, \
            patch("run.create_db_and_tables", new=AsyncMock()) as create_tables_mock:
        run.main()

    setup_logging_mock.assert_called_once_with()
    create_tables_mock.assert_awaited_once()
