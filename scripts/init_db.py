# scripts/init_db.py
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from config import Config
from database import init_db, create_tables


def main():
    """Create the users, accounts, favorites and notes tables"""
    print(f"Creating tables at: {Config.DATABASE_URL}")
    init_db(Config.DATABASE_URL)
    create_tables()
    print("Database tables created successfully!")


if __name__ == '__main__':
    main()
