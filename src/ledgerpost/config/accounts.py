"""Account role configuration loading."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from ledgerpost.domain.category_mapping import CATEGORY_ACCOUNT_CODES
from ledgerpost.domain.chart_of_accounts import build_account_ids, default_chart
from ledgerpost.domain.entities import AccountIds
from ledgerpost.domain.errors import ConfigurationError, missing_cash_account, unknown_account_role


@dataclass(frozen=True)
class AccountConfig:
    """Account roles plus the accounts that chart-of-accounts categories post to."""

    account_ids: AccountIds
    category_accounts: dict[str, str] = field(default_factory=dict)

    def category_account_id(self, category_name: str) -> Optional[str]:
        """Get the account ID for a category name, or None if unmapped."""
        return self.category_accounts.get(category_name)


def default_account_config() -> AccountConfig:
    """Account configuration for the default chart, where IDs equal codes."""
    return AccountConfig(
        account_ids=build_account_ids(default_chart()),
        category_accounts=dict(CATEGORY_ACCOUNT_CODES),
    )


def load_account_config(path: str | Path) -> AccountConfig:
    """Load account configuration from a YAML file.

    The file looks like::

        roles:
          cash: "1000"
          sales_revenue: "4000"
          misc_expense: "6900"
        categories:
          Rent: "6100"

    Args:
        path: Path to the YAML file

    Returns:
        AccountConfig

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file is malformed or names unknown roles
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Account configuration not found: {path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid account configuration {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Account configuration {path} must be a mapping")

    roles = data.get("roles") or {}
    categories = data.get("categories") or {}
    if not isinstance(roles, dict) or not isinstance(categories, dict):
        raise ConfigurationError("'roles' and 'categories' must be mappings")

    known_roles = set(AccountIds.role_names())
    role_ids = {}
    for role, account_id in roles.items():
        if role not in known_roles:
            raise ConfigurationError(unknown_account_role(role))
        if account_id is not None:
            role_ids[AccountIds.field_for_role(role)] = str(account_id)

    if "cash_account_id" not in role_ids:
        raise ConfigurationError(missing_cash_account())

    return AccountConfig(
        account_ids=AccountIds(**role_ids),
        category_accounts={str(name): str(account_id) for name, account_id in categories.items()},
    )
