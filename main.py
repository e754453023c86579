import argparse
import uvicorn
from mangashelf.db.init_db import init_db
from mangashelf.services.settings_service import add_storage_root

def main():
    ap = argparse.ArgumentParser(description="Serve a local manga library.")
    ap.add_argument("--root", action="append", default=[], help="Add a library root (repeatable)")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    args = ap.parse_args()

    init_db()
    for root in args.root:
        add_storage_root(root)

    uvicorn.run("mangashelf.main:app", host=args.host, port=args.port)

if __name__ == "__main__":
    main()
