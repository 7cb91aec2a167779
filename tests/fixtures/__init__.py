"""Shared test fixtures for the lineage test suite.

Runner mocks (tests/fixtures/runners.py)
    make_result: Build a CommandResult with convenient defaults.
    mock_runner: MagicMock(spec=CommandRunner) returning success by default.

Git repositories (tests/fixtures/git.py)
    git_repo: A temporary GitPython-initialized repository with identity set.
    commit_file: Factory that writes, stages and commits a file.

Configuration (tests/fixtures/config.py)
    lineage_config: LineageConfig built from defaults only.
"""
