# dutyplan/io - Input/output handling
from .csv_loader import load_team, save_team, team_to_dataframe
from .excel_export import export_roster_to_csv, export_roster_to_excel
from .wish_import import WishImportResult, apply_vacations, create_wish_template, import_wishes

__all__ = [
    "load_team",
    "save_team",
    "team_to_dataframe",
    "export_roster_to_excel",
    "export_roster_to_csv",
    "import_wishes",
    "apply_vacations",
    "create_wish_template",
    "WishImportResult",
]
