"""Validation of a complete deploy description.

Runs every field check against one error sink so that the caller gets all
problems with a request in a single pass.
"""

import logging
from typing import Any, Dict, Optional

from gcelib.accounts import AccountLookup
from gcelib.attribute_validator import AttributeValidator, ErrorSink, ValidationErrors
from gcelib.config_loader import DEFAULT_DECORATOR

logger = logging.getLogger(__name__)


def validate_deploy_description(
    description: Dict[str, Any],
    lookup: AccountLookup,
    errors: Optional[ErrorSink] = None,
    decorator: str = DEFAULT_DECORATOR,
) -> ErrorSink:
    """Validate the fields of a deploy request.

    Args:
        description: Request fields ('account', 'application', 'stack',
            'freeFormDetails', 'repositoryUrl', 'configFilepaths')
        lookup: Account lookup used to check 'account'
        errors: Sink to append to; a new ValidationErrors when omitted
        decorator: Field-path prefix for rejections

    Returns:
        The sink holding any rejections
    """
    if errors is None:
        errors = ValidationErrors()
    validator = AttributeValidator(decorator, errors)

    validator.validate_credentials(description.get("account"), lookup)
    validator.validate_application(description.get("application"), "application")
    validator.validate_stack(description.get("stack"), "stack")
    validator.validate_details(description.get("freeFormDetails"), "freeFormDetails")
    validator.validate_not_empty(description.get("repositoryUrl"), "repositoryUrl")
    validator.validate_not_empty(description.get("configFilepaths"), "configFilepaths")

    if isinstance(errors, ValidationErrors):
        logger.info(f"Validated {decorator}: {len(errors)} rejection(s)")
    return errors
