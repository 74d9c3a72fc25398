# config.py
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

DATA_DIR = Path(os.getenv('BIBLE_DATA_DIR', BASE_DIR / 'data'))


class Config:
    CORPUS_FILE = Path(os.getenv('BIBLE_CORPUS_FILE', DATA_DIR / 'drb.tsv'))
    COMMENTARY_DIR = Path(os.getenv('BIBLE_COMMENTARY_DIR', DATA_DIR / 'commentary'))

    SEARCH_LIMIT = int(os.getenv('BIBLE_SEARCH_LIMIT', 100))
    MAX_SEARCH_LIMIT = int(os.getenv('BIBLE_MAX_SEARCH_LIMIT', 1000))

    # Parsing threads; all published state is owned by a separate single thread
    LOADER_WORKERS = int(os.getenv('BIBLE_LOADER_WORKERS', 2))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
