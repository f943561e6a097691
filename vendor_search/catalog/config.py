from dataclasses import dataclass
from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Locations of the seed tables the in-memory catalog is built from.
    """

    data_dir: Path = _DATA_DIR
    vendors_filename: str = "vendors.csv"
    contacts_filename: str = "contacts.csv"
    groups_filename: str = "groups.csv"

    @property
    def vendors_path(self) -> Path:
        return self.data_dir / self.vendors_filename

    @property
    def contacts_path(self) -> Path:
        return self.data_dir / self.contacts_filename

    @property
    def groups_path(self) -> Path:
        return self.data_dir / self.groups_filename


DEFAULT_CATALOG_CONFIG = CatalogConfig()
