"""Contract deployment exceptions."""

from superwallet.core.exceptions import NotFound


class DeploymentNotFoundError(NotFound):
    default_message = "Deployment not found"
