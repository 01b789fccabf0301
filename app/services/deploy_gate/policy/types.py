"""
Deploy policy model.

Pure data model: no service imports.
"""

import fnmatch
from typing import Tuple

from sqlmodel import SQLModel, Field


class DeployPolicy(SQLModel):
    """
    Identifiers and allow-lists the gate checks against.

    Parsed from policy YAML, not a database table.
    """

    status_context: str = Field(
        default="continuous-integration/codeship",
        description="The only CI status context that triggers the gate.",
    )
    branch_prefix: str = Field(
        default="dependabot", description="Prefix of bot-created branches."
    )
    label: str = Field(
        default="dependencies", description="Label the bot puts on its PRs."
    )
    bot_author_prefix: str = Field(
        default="dependabot",
        description="Case-insensitive prefix of the bot's commit author name.",
    )
    merge_method: str = Field(
        default="merge", description="merge, squash or rebase."
    )
    mergeable_dev_dependencies: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Package name globs merged without a deploy.",
    )

    def is_mergeable_dev_dependency(self, package_name: str) -> bool:
        return any(
            fnmatch.fnmatchcase(package_name, pattern)
            for pattern in self.mergeable_dev_dependencies
        )

    def is_bot_branch(self, branch_name: str) -> bool:
        return branch_name.startswith(self.branch_prefix)

    def is_bot_author(self, author_name: str) -> bool:
        return author_name.lower().startswith(self.bot_author_prefix.lower())
