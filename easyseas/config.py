"""Configuration utilities.

Central place to load environment driven settings (email credentials, data file, output path).
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()


@dataclass(slots=True)
class Settings:
    src_mail: str | None = os.getenv("SRC_MAIL")
    src_pwd: str | None = os.getenv("SRC_PWD")
    dst_mail: str | None = os.getenv("DST_MAIL")
    data_file: Path = Path(os.getenv("DATA_FILE", "cruises.json"))
    output_html: Path = Path(os.getenv("OUTPUT_HTML", "easyseas.html"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def email_configured(self) -> bool:
        return all([self.src_mail, self.src_pwd, self.dst_mail])


settings = Settings()
