import json
import logging
import argparse
import sys

from core.config_loader import load_config
from core.scorer import CompatibilityScorer
from database.database import db_session_scope
from database.init_db import init_db
from database.repository import MatchingRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def explain_pair(requester_id: int, target_id: int) -> int:
    """Print the score breakdown for requester -> target. Returns a process exit code."""
    with db_session_scope() as session:
        repo = MatchingRepository(session)
        profiles = repo.get_profiles([requester_id, target_id])

    missing = [uid for uid in (requester_id, target_id) if uid not in profiles]
    if missing:
        logger.error(f"Unknown user(s): {missing}")
        return 1

    breakdown = CompatibilityScorer().breakdown(profiles[requester_id], profiles[target_id])
    print(json.dumps(breakdown.to_dict(), indent=2, default=str))
    return 0


def main():
    parser = argparse.ArgumentParser(description="Match Engine Driver")
    parser.add_argument('--mode', type=str, choices=['serve', 'init-db', 'explain'], default='serve',
                      help='serve (default): init DB and run the API; init-db: create tables; '
                           'explain: print the score breakdown for --user -> --target')
    parser.add_argument('--user', type=int, help='Requesting user id (explain mode)')
    parser.add_argument('--target', type=int, help='Target user id (explain mode)')
    args = parser.parse_args()

    logger.info(f"Main driver starting in {args.mode.upper()} mode...")

    if args.mode == 'explain':
        if args.user is None or args.target is None:
            parser.error("--user and --target are required in explain mode")
        sys.exit(explain_pair(args.user, args.target))

    # Initialize DB (with retry logic)
    init_db()

    if args.mode == 'serve':
        import uvicorn

        config = load_config()
        uvicorn.run(
            "web.backend.app:app",
            host=config.web.host,
            port=config.web.port,
            reload=False,
            log_level="info"
        )


if __name__ == "__main__":
    main()
