"""Scan command.

Thin command that orchestrates settings, infrastructure and the scanner.
No business logic - just wiring and coordination.
"""

from __future__ import annotations

from botocore.exceptions import BotoCoreError

from approvalradar.domain.errors import ConfigError
from approvalradar.domain.settings import ScanSettings
from approvalradar.infrastructure.aws.client import CodeCommitClient
from approvalradar.infrastructure.terminal.renderer import OnDisable, StatusLineRenderer
from approvalradar.services.approval_scanner import ApprovalScanner


def cmd_scan(
    region: str | None = None,
    mine: bool | None = None,
    debug: bool | None = None,
    timeout_minutes: float | None = None,
    config_path: str | None = None,
    renderer: StatusLineRenderer | None = None,
) -> int:
    """Report open pull requests that need the caller's approval.

    Thin command that:
    1. Resolves settings from defaults, the config file and flags
    2. Initializes the renderer, AWS client and scanner
    3. Runs the scan
    4. Prints one console link per line on stdout

    Args:
        region: AWS region (None: use the config file or default)
        mine: Report pull requests the caller opened instead
        debug: Enable debug output
        timeout_minutes: Overall deadline for the scan
        config_path: YAML settings file
        renderer: Renderer to use (default: one bound to stdout/stderr)

    Returns:
        Exit code (0 for success). Fatal errors exit with status 1 via
        the renderer.
    """
    # --------------------------------------------------------
    # 1. Settings
    # --------------------------------------------------------
    try:
        settings = ScanSettings.load(
            config_path,
            region=region,
            return_mine=mine,
            debug=debug,
            timeout_minutes=timeout_minutes,
        )
    except ConfigError as e:
        renderer = renderer or StatusLineRenderer(debug=bool(debug))
        renderer.fatal(e)

    if renderer is None:
        renderer = StatusLineRenderer(debug=settings.debug)
    renderer.debug_enabled = settings.debug
    if settings.debug:
        renderer.disable_single_line_mode(OnDisable.NONE)

    # --------------------------------------------------------
    # 2. Wiring
    # --------------------------------------------------------
    try:
        client = CodeCommitClient.create(settings.region, settings.timeout_seconds)
    except BotoCoreError as e:
        renderer.fatal(e)

    scanner = ApprovalScanner(
        client=client,
        renderer=renderer,
        region=settings.region,
        return_mine=settings.return_mine,
    )

    # --------------------------------------------------------
    # 3. Scan
    # --------------------------------------------------------
    ok, result = scanner.scan()
    if not ok:
        renderer.fatal(result)

    # --------------------------------------------------------
    # 4. Report
    # --------------------------------------------------------
    for url in result:
        renderer.println(url)
    if not result:
        renderer.disable_single_line_mode(OnDisable.CLEAR_LINE)

    return 0
