import os
import json
import datetime as dt
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import List

from jsonschema import validate, Draft202012Validator
from jsonschema.exceptions import ValidationError

# ---------- Time helpers ----------

def now_utc():
    return dt.datetime.now(dt.timezone.utc)

# ---------- Config validation ----------

CONFIG_SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schemas", "config.schema.json")

def load_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

def validate_config(cfg: dict):
    schema = json.loads(load_file(CONFIG_SCHEMA_PATH))
    try:
        validate(instance=cfg, schema=schema, cls=Draft202012Validator)
    except ValidationError as e:
        raise ValueError(f"Config validation error: {e.message} at {list(e.path)}") from e

# ---------- Output writer ----------

def write_output(batch, human_md: str, prompt_text: str, out_cfg: dict) -> List[str]:
    out_dir = out_cfg["dir"]
    formats = out_cfg.get("formats", ["json"])
    os.makedirs(out_dir, exist_ok=True)
    ts = now_utc().strftime("%Y%m%dT%H%M%SZ")
    base = os.path.join(out_dir, f"compression_{ts}")
    written = []

    if "json" in formats:
        with open(base + ".json", "w", encoding="utf-8") as f:
            json.dump(batch.model_dump(mode="json", by_alias=True), f, ensure_ascii=False, indent=2)
        written.append(base + ".json")

    if "md" in formats:
        with open(base + ".md", "w", encoding="utf-8") as f:
            f.write(human_md)
        written.append(base + ".md")

    if "txt" in formats:
        with open(base + ".txt", "w", encoding="utf-8") as f:
            f.write(prompt_text)
        written.append(base + ".txt")

    return written

# ---------- Logging ----------

_LOGGER_INITIALIZED = False

class JsonFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "ts": dt.datetime.fromtimestamp(record.created, dt.timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def _build_logger():
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    level = os.getenv("LOG_LEVEL", "INFO").upper()
    log_dir = os.getenv("LOG_DIR")
    json_mode = os.getenv("LOG_JSON", "false").lower() == "true"

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level, logging.INFO))

    if json_mode:
        fmt = JsonFormatter()
    else:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    ch = logging.StreamHandler()
    ch.setLevel(logger.level)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # File logging is opt-in; the compressor is often embedded in other processes
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = TimedRotatingFileHandler(os.path.join(log_dir, "schemahint.log"), when="D", backupCount=7, encoding="utf-8")
        fh.setLevel(logger.level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    _LOGGER_INITIALIZED = True

def get_logger(name: str = None) -> logging.Logger:
    _build_logger()
    return logging.getLogger(name if name else __name__)
