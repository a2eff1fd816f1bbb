"""Connection configuration for the Shopify client."""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from dotenv import load_dotenv

from .constants import ENV_VARS, SHOP_DOMAIN_SUFFIX
from .exceptions import ConfigError
from .utils.validators import parse_bool_option, strip_shop_suffix, validate_credential, validate_shop_domain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrivateAppAuth:
    """Static credential pair sent as HTTP Basic auth."""

    api_key: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class PublicAppAuth:
    """OAuth access token sent in the X-Shopify-Access-Token header."""

    access_token: str = field(repr=False)
    api_key: Optional[str] = None


AuthMode = Union[PrivateAppAuth, PublicAppAuth]


@dataclass(frozen=True)
class ConnectionConfig:
    """Validated, immutable connection options for one shop."""

    shop: str
    auth: AuthMode

    @property
    def private_app(self) -> bool:
        return isinstance(self.auth, PrivateAppAuth)

    @property
    def base_url(self) -> str:
        return f"https://{self.shop}{SHOP_DOMAIN_SUFFIX}"

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "ConnectionConfig":
        """Validate raw connection options and build a config.

        Validation is all-or-nothing: "shop" and an explicit "private_app"
        flag are always required, then "api_key" and "password" for private
        apps or "access_token" for public apps.

        Args:
            options: Mapping with shop, private_app, api_key, password, access_token

        Returns:
            A validated ConnectionConfig

        Raises:
            ConfigError: If any required option is missing or malformed
        """
        shop = options.get("shop")
        private_app = parse_bool_option(options.get("private_app"))

        missing = [name for name, value in (("shop", shop), ("private_app", private_app)) if value is None]
        if missing:
            raise ConfigError(
                f'{" and ".join(missing)} must be provided when instantiating the Shopify client'
            )

        if not validate_shop_domain(shop):
            raise ConfigError(f'"{shop}" is not a valid Shopify shop domain')

        if private_app:
            for name in ("api_key", "password"):
                if not validate_credential(options.get(name)):
                    raise ConfigError(
                        f'You must specify the "{name}" option when instantiating the Shopify client for a private app'
                    )
            auth: AuthMode = PrivateAppAuth(api_key=options["api_key"], password=options["password"])
        else:
            if not validate_credential(options.get("access_token")):
                raise ConfigError(
                    'You must specify the "access_token" option when instantiating the Shopify client for a public app'
                )
            auth = PublicAppAuth(access_token=options["access_token"], api_key=options.get("api_key"))

        return cls(shop=strip_shop_suffix(shop), auth=auth)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "ConnectionConfig":
        """Build a config from SHOPIFY_* environment variables.

        A .env file is loaded first if present; variables already set in
        the environment win.

        Raises:
            ConfigError: If the environment does not describe a valid connection
        """
        load_dotenv(dotenv_path)

        options = {name: os.getenv(env_var) for name, env_var in ENV_VARS.items()}
        if options["private_app"] is not None and parse_bool_option(options["private_app"]) is None:
            raise ConfigError(
                f'{ENV_VARS["private_app"]} must be one of true/false/1/0/yes/no, got "{options["private_app"]}"'
            )

        config = cls.from_options(options)
        logger.info(f"Loaded Shopify connection for shop {config.shop} (private_app={config.private_app})")
        return config
