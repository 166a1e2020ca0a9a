from pathlib import Path
from typing import Optional

from garminconnect import Garmin, GarminConnectAuthenticationError
from garth.exc import GarthHTTPError
from loguru import logger


class GarminAccountManager:
    """Locates stored Garmin Connect tokens and builds clients from them."""

    def __init__(self, token_store_dir: Path):
        """
        Initialize the GarminAccountManager.

        Args:
            token_store_dir: Directory holding Garmin Connect tokens, one
                             subdirectory per user id.
        """
        self.token_store_dir = Path(token_store_dir)
        self.token_store_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Initialized GarminAccountManager with token_store_dir: {self.token_store_dir}")

    def get_user_token_path(self, user_id: int) -> Path:
        return self.token_store_dir / str(user_id)

    def is_authenticated(self, user_id: int) -> bool:
        """
        Check whether tokens were provisioned for a user.

        Args:
            user_id: The user to check.

        Returns:
            True if the user's token directory exists and is not empty.
        """
        user_token_path = self.get_user_token_path(user_id)
        is_auth = user_token_path.exists() and any(user_token_path.iterdir())
        logger.debug(f"User {user_id} Garmin token status: {is_auth}")
        return is_auth

    def create_client(self, user_id: int) -> Optional[Garmin]:
        """
        Create a logged-in Garmin client from a user's stored tokens.

        Args:
            user_id: The user to create the client for.

        Returns:
            A Garmin client, or None when there are no tokens or they are rejected.
        """
        if not self.is_authenticated(user_id):
            logger.warning(f"No Garmin Connect tokens stored for user {user_id}")
            return None

        user_token_path = self.get_user_token_path(user_id)
        try:
            garmin = Garmin()
            garmin.login(user_token_path.as_posix())
            logger.info(f"Created Garmin client for user {user_id}")
            return garmin
        except (FileNotFoundError, GarthHTTPError, GarminConnectAuthenticationError) as e:
            logger.error(f"Garmin tokens for user {user_id} were rejected: {e}")
            return None
