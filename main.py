import sys
from dotenv import load_dotenv

from ytsync.config import load_config
from ytsync.exceptions import ConfigError
from ytsync.extract.youtube import build_client
from ytsync.load.notion import NotionLoader
from ytsync.sync import run_sync

# Load env
load_dotenv()

def main():
    try:
        config = load_config()
    except ConfigError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    settings = config.settings
    print(f"--- YouTube -> Notion Sync Started (DRY_RUN={settings.dry_run}) ---")

    loader = NotionLoader(config.notion_token, config.notion_database_id)
    youtube = build_client(config.youtube_api_key)

    state = run_sync(youtube, loader, config.channels, settings)

    if settings.dry_run:
        print(f"[DRY_RUN] Would insert {state.inserted} videos into Notion.")
    else:
        print(f"Inserted {state.inserted} videos into Notion.")

if __name__ == "__main__":
    main()
