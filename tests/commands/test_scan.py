"""Tests for the scan command.

Tests cover:
- Result links printed on stdout, one per line
- Exit codes for success, empty results and fatal errors
- Zero results clearing the progress line
- Settings passthrough to the AWS client and scanner
- Config errors reported as fatal
- Results that arrive after the scan deadline are discarded
"""

import io
import time
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock, patch

from botocore.exceptions import InvalidRegionError

from approvalradar.commands.scan import cmd_scan
from approvalradar.domain.codecommit import ApprovalRule, PullRequest, Repository
from approvalradar.domain.identity import Identity
from approvalradar.infrastructure.aws.client import CodeCommitClient, Deadline
from approvalradar.infrastructure.terminal.renderer import CLEAR_LINE, RenderMode, StatusLineRenderer

ALICE = Identity(user_name="alice", user_id="AIDA1", arn="arn:aws:iam::1:user/alice")
BOB_ARN = "arn:aws:iam::1:user/bob"


class TtyStringIO(io.StringIO):
    def isatty(self):
        return True


def _make_pr(author_arn: str) -> PullRequest:
    return PullRequest(
        pull_request_id="5",
        author_arn=author_arn,
        approval_rules=[ApprovalRule(name="r", content='{"x": "...CodeCommitApprovers:alice..."}')],
    )


class TestCmdScan(unittest.TestCase):

    def setUp(self):
        self.tmp = TemporaryDirectory()
        self.config = Path(self.tmp.name) / "config.yaml"
        self.config.write_text("")

        self.client = MagicMock()
        self.client.deadline.expired = False
        self.client.get_user.return_value = (True, ALICE)
        self.client.list_repositories.return_value = (True, [Repository(name="repo1")])
        self.client.list_open_pull_requests.return_value = (True, ["5"])
        self.client.get_pull_request.return_value = (True, _make_pr(BOB_ARN))

        self.renderer = StatusLineRenderer(out=io.StringIO(), err=io.StringIO())

    def tearDown(self):
        self.tmp.cleanup()

    def _patch_client(self):
        return patch(
            "approvalradar.commands.scan.CodeCommitClient.create",
            return_value=self.client,
        )

    def _run(self, **kwargs) -> int:
        kwargs.setdefault("config_path", str(self.config))
        kwargs.setdefault("renderer", self.renderer)
        with self._patch_client() as create:
            result = cmd_scan(**kwargs)
        self.create = create
        return result

    def test_prints_pr_awaiting_approval(self):
        result = self._run()

        self.assertEqual(result, 0)
        self.assertEqual(
            self.renderer.out.getvalue(),
            "https://us-east-2.console.aws.amazon.com/codesuite/codecommit/repositories/"
            "repo1/pull-requests/5/details?region=us-east-2\n",
        )

    def test_own_pr_prints_nothing(self):
        self.client.get_pull_request.return_value = (True, _make_pr(ALICE.arn))

        result = self._run()

        self.assertEqual(result, 0)
        self.assertEqual(self.renderer.out.getvalue(), "")

    def test_mine_flag(self):
        self.client.get_pull_request.return_value = (True, _make_pr(ALICE.arn))

        result = self._run(mine=True)

        self.assertEqual(result, 0)
        self.assertIn("/repositories/repo1/pull-requests/5/", self.renderer.out.getvalue())
        self.client.list_open_pull_requests.assert_called_once_with("repo1", author_arn=ALICE.arn)

    def test_region_and_timeout_reach_client(self):
        self._run(region="eu-west-1", timeout_minutes=2)

        self.create.assert_called_once_with("eu-west-1", 120)
        self.assertIn("?region=eu-west-1", self.renderer.out.getvalue())

    def test_identity_failure_is_fatal(self):
        self.client.get_user.return_value = (False, "An error occurred (AccessDenied) when calling the GetUser operation")

        with self.assertRaises(SystemExit) as ctx:
            self._run()

        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(self.renderer.out.getvalue(), "")
        self.assertIn("[FATAL]: An error occurred (AccessDenied)", self.renderer.err.getvalue())

    def test_detail_failure_prints_no_partial_results(self):
        self.client.list_open_pull_requests.return_value = (True, ["4", "5"])
        self.client.get_pull_request.side_effect = [(True, _make_pr(BOB_ARN)), (False, "throttled")]

        with self.assertRaises(SystemExit):
            self._run()

        self.assertEqual(self.renderer.out.getvalue(), "")

    def test_result_arriving_after_deadline_is_not_printed(self):
        iam = MagicMock()
        iam.get_user.return_value = {"User": {"UserName": "alice", "UserId": "AIDA1", "Arn": ALICE.arn}}
        codecommit = MagicMock()
        codecommit.get_paginator.return_value.paginate.side_effect = [
            [{"repositories": [{"repositoryName": "repo1"}]}],
            [{"pullRequestIds": ["5"]}],
        ]

        def slow_get_pull_request(**kwargs):
            time.sleep(0.3)
            return {"pullRequest": {
                "pullRequestId": "5",
                "authorArn": BOB_ARN,
                "approvalRules": [{"approvalRuleName": "r", "approvalRuleContent": "CodeCommitApprovers:alice"}],
            }}

        codecommit.get_pull_request.side_effect = slow_get_pull_request
        self.client = CodeCommitClient(iam=iam, codecommit=codecommit, deadline=Deadline(0.1))

        with self.assertRaises(SystemExit) as ctx:
            self._run()

        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(self.renderer.out.getvalue(), "")
        self.assertIn("[FATAL]: scan deadline exceeded", self.renderer.err.getvalue())

    def test_zero_results_clear_progress_line(self):
        renderer = StatusLineRenderer(out=io.StringIO(), err=TtyStringIO())
        self.client.get_pull_request.return_value = (True, _make_pr(ALICE.arn))

        result = self._run(renderer=renderer)

        self.assertEqual(result, 0)
        self.assertIs(renderer.mode, RenderMode.MULTI_LINE)
        self.assertTrue(renderer.err.getvalue().endswith(CLEAR_LINE))
        self.assertEqual(renderer.out.getvalue(), "")

    def test_debug_leaves_single_line_mode_before_scanning(self):
        renderer = StatusLineRenderer(out=io.StringIO(), err=TtyStringIO())

        self._run(renderer=renderer, debug=True)

        err = renderer.err.getvalue()
        self.assertIn("[DEBUG]: Found PR: 5\n", err)
        self.assertFalse(err.startswith(CLEAR_LINE))

    def test_bad_config_is_fatal(self):
        self.config.write_text("timeout_minutes: soon\n")

        with self.assertRaises(SystemExit) as ctx:
            self._run()

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("[FATAL]: timeout_minutes", self.renderer.err.getvalue())

    def test_client_construction_failure_is_fatal(self):
        with patch(
            "approvalradar.commands.scan.CodeCommitClient.create",
            side_effect=InvalidRegionError(region_name="not a region"),
        ):
            with self.assertRaises(SystemExit):
                cmd_scan(config_path=str(self.config), renderer=self.renderer)

        self.assertIn("[FATAL]: ", self.renderer.err.getvalue())


if __name__ == "__main__":
    unittest.main()
