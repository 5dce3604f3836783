import openpyxl
import pytest

from prep_planner.db import Store


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_planner.db")
    return db_path


@pytest.fixture
def store(tmp_db):
    s = Store(tmp_db)
    yield s
    s.close()


@pytest.fixture
def make_workbook(tmp_path):
    """Write an .xlsx with ``{sheet name: [row dicts]}`` and return its path."""
    def _make(sheets: dict, name: str = "plan.xlsx"):
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for sheet_name, rows in sheets.items():
            ws = wb.create_sheet(sheet_name)
            headers = []
            for row in rows:
                for key in row:
                    if key not in headers:
                        headers.append(key)
            ws.append(headers)
            for row in rows:
                ws.append([row.get(h) for h in headers])
        path = tmp_path / name
        wb.save(path)
        return path
    return _make
