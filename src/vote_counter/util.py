import csv
import decimal
import os
import pathlib

###############################################################
# constants

# placeholder for a round count or transfer that does not apply to a row
NAN = decimal.Decimal("NaN")

########################
# helper funcs


class CSVLogger:
    """Append-only csv log with a fixed header. Tracks whether any row beyond the header was written,
    so callers can mark logs that stayed empty.
    """

    def __init__(self, path, header_list):
        self.path = pathlib.Path(path)
        self.n_columns = len(header_list)
        self.n_rows = 0
        self._file = open(self.path, "w", newline="")
        self._writer = csv.writer(self._file, quoting=csv.QUOTE_ALL)
        self._write_row(header_list)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _write_row(self, row_list):
        if len(row_list) != self.n_columns:
            raise RuntimeError(
                f"CSVLogger.write ({self.path.name}) got a row of length {len(row_list)}, "
                f"header has {self.n_columns} columns"
            )
        self._writer.writerow(row_list)
        self._file.flush()

    def write(self, row_list):
        self._write_row(row_list)
        self.n_rows += 1

    @property
    def is_empty(self):
        return self.n_rows == 0

    def close(self):
        if not self._file.closed:
            self._file.close()


def verifyDir(dir_path):
    """Create a directory, and any missing parents, if it does not exist yet."""
    os.makedirs(dir_path, exist_ok=True)


def decimal2float(stat, round_places=3):
    """Convert a Decimal tally value to a rounded float for reports and output files.
    Anything that is not a Decimal is returned unchanged.
    """
    if isinstance(stat, decimal.Decimal):
        return round(float(stat), round_places)
    return stat
