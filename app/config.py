import os
from pathlib import Path

from pydantic import BaseModel

DATA_DIR_ENV = "SALES_REPORTS_DATA_DIR"
DEFAULT_DATA_DIR = "files"


class ReportSettings(BaseModel):
    """File locations for the reference tables, sales files and reports."""
    data_dir: Path = Path(DEFAULT_DATA_DIR)
    sellers_file: str = "salesmen_info.csv"
    products_file: str = "products.csv"
    sales_prefix: str = "sales_"
    sales_suffix: str = ".csv"
    seller_report_file: str = "vendor_sales.csv"
    product_report_file: str = "product_sales.csv"
    # sellers sharing a full name are reported as one row
    merge_duplicate_names: bool = True

    @classmethod
    def from_env(cls) -> "ReportSettings":
        return cls(data_dir=Path(os.environ.get(DATA_DIR_ENV, DEFAULT_DATA_DIR)))

    @property
    def sellers_path(self) -> Path:
        return self.data_dir / self.sellers_file

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file

    @property
    def seller_report_path(self) -> Path:
        return self.data_dir / self.seller_report_file

    @property
    def product_report_path(self) -> Path:
        return self.data_dir / self.product_report_file

    def sales_file_for(self, document_id: str) -> Path:
        return self.data_dir / f"{self.sales_prefix}{document_id}{self.sales_suffix}"
