"""Package installer: a thin pass-through to the package manager."""

from typing import Optional, Sequence

from autopublish.models.process import CommandOutcome
from autopublish.services.process import ProcessRunner


class PackageInstaller:
    """Installs packages into the runner's working directory."""

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        package_manager: str = "npm",
        install_args: Sequence[str] = ("install", "--silent"),
    ):
        self.runner = runner or ProcessRunner()
        self.package_manager = package_manager
        self.install_args = list(install_args)

    def install(self, dependencies: Sequence[str]) -> CommandOutcome:
        """
        Install the named packages.

        Raises:
            ProcessError: If the package manager fails
        """
        return self.runner.run(self.package_manager, [*self.install_args, *dependencies])
