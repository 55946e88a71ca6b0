"""Writer module for JSON and CSV output.

Per-period naming convention: rvie_202401.json / rvie_202401.csv
"""

from sunat_rvie.writer.record_writer import (
    load_records,
    records_filename,
    records_to_dataframe,
    records_to_dicts,
    save_records,
    write_records_csv,
)

__all__ = [
    "load_records",
    "records_filename",
    "records_to_dataframe",
    "records_to_dicts",
    "save_records",
    "write_records_csv",
]
