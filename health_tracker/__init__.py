from pathlib import Path

from dotenv import load_dotenv

env_file_path = Path(__file__).parent.parent / ".env"
if env_file_path.exists():
    load_dotenv(env_file_path)
