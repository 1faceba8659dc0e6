# scripts/sync_provider_users.py
import argparse
import json
import logging
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import Config
from database import init_db, get_db_session
from models import Account, User
from utils.auth import import_provider_accounts, sync_provider_users

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Link and repair users behind identity-provider accounts")
    parser.add_argument('--provider', default='google', help="Provider to repair (default: google)")
    parser.add_argument('--database-url', default=Config.DATABASE_URL)
    parser.add_argument(
        '--import-file',
        help="JSON list of {provider_account_id, email, username} to link before repairing"
    )
    args = parser.parse_args(argv)

    init_db(args.database_url)
    with get_db_session() as db:
        if args.import_file:
            with open(args.import_file, encoding='utf-8') as f:
                records = json.load(f)
            user_ids = import_provider_accounts(db, args.provider, records)
            print(f"Linked {len(user_ids)} {args.provider} account(s)")

        linked = db.query(Account).join(User, Account.user_id == User.id).filter(
            Account.provider == args.provider
        ).all()
        for account in linked:
            print(f"User already exists for account: {account.id}, username: {account.user.username}")

        created = sync_provider_users(db, provider=args.provider)

    print(f"Created {created} user(s) for {args.provider} accounts")
    return 0


if __name__ == '__main__':
    try:
        sys.exit(main())
    except Exception as e:
        logger.error(f"Sync failed: {e}", exc_info=True)
        sys.exit(1)
