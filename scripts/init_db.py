import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from innovation_server.config import load_config
from innovation_server.db import connect, ensure_indexes, get_database, ping


def main() -> None:
    cfg = load_config()
    client = connect(cfg.MONGO_URI, strict=cfg.MONGO_SERVER_API_STRICT)
    try:
        if not ping(client):
            raise SystemExit(1)
        ensure_indexes(get_database(client, cfg.MONGO_DB_NAME))
    finally:
        client.close()

    print(f"DB initialized: {cfg.MONGO_DB_NAME}")


if __name__ == "__main__":
    main()
