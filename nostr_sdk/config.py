import os

from dotenv import load_dotenv

from .keys import Keypair

NSEC_ENV = "NOSTR_NSEC"
LOG_LEVEL_ENV = "NOSTR_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def get_keypair_from_env() -> Keypair:
    load_dotenv()
    nsec = os.getenv(NSEC_ENV)
    if not nsec:
        raise ValueError(f"Missing {NSEC_ENV} in .env (e.g., {NSEC_ENV}=nsec1...)")

    return Keypair.from_nsec(nsec)


def get_log_level() -> str:
    load_dotenv()
    return (os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
