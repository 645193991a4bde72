import os
import pytest
from click.testing import CliRunner
from godockerize import __version__
from godockerize.CLI.main import cli
from godockerize.MANAGERS.build_orchestrator import BuildOrchestrator


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def no_config(tmp_path):
    return str(tmp_path / "missing.yml")


def make_orchestrator(toolchain, docker, staging_parent):
    return BuildOrchestrator(toolchain=toolchain, docker=docker, staging_parent=str(staging_parent))


def test_cli_help(runner):
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'build a Docker image from Go packages' in result.output

def test_cli_version(runner):
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert __version__ in result.output

def test_cli_build_help(runner):
    result = runner.invoke(cli, ['build', '--help'])
    assert result.exit_code == 0
    for flag in ('--tag', '--base', '--env', '--env-file', '--dry-run'):
        assert flag in result.output

def test_cli_build_requires_packages(runner, no_config):
    result = runner.invoke(cli, ['-c', no_config, 'build'])
    assert result.exit_code == 2
    assert '"godockerize build" requires 1 or more arguments' in result.output

def test_cli_dry_run(runner, no_config, make_package, fake_toolchain, fake_docker, staging_parent):
    toolchain = fake_toolchain([
        make_package("example.com/app/cmd/server"),
        make_package("example.com/app/cmd/worker"),
    ])
    docker = fake_docker()
    result = runner.invoke(
        cli,
        ['-c', no_config, 'build', '--dry-run', '--base', 'alpine:3.6',
         'example.com/app/cmd/server', 'example.com/app/cmd/worker'],
        obj={'orchestrator': make_orchestrator(toolchain, docker, staging_parent)},
    )
    assert result.exit_code == 0, result.output
    assert result.output == (
        "godockerize: Generated Dockerfile:\n"
        "  FROM alpine:3.6\n"
        "  RUN apk add --no-cache ca-certificates mailcap tini\n"
        '  ENTRYPOINT ["/sbin/tini", "--", "/usr/local/bin/server"]\n'
        "  ADD server /usr/local/bin/\n"
        "  ADD worker /usr/local/bin/\n"
    )
    assert toolchain.compiled == []
    assert docker.builds == []

def test_cli_build_with_tag_and_env(runner, no_config, tmp_path, make_package, fake_toolchain, fake_docker,
                                    staging_parent):
    env_file = tmp_path / "app.env"
    env_file.write_text("FROM_FILE=1\n")
    toolchain = fake_toolchain([make_package("example.com/app", {"main.go": "package main\n//docker:env A=1\n"})])
    docker = fake_docker()
    result = runner.invoke(
        cli,
        ['-c', no_config, 'build', '-t', 'acme/app:2', '--env', 'B=2', '--env', 'A=1',
         '--env-file', str(env_file), 'example.com/app'],
        obj={'orchestrator': make_orchestrator(toolchain, docker, staging_parent)},
    )
    assert result.exit_code == 0, result.output
    assert docker.builds[0]["tag"] == "acme/app:2"
    assert "ENV A=1 B=2 FROM_FILE=1\n" in docker.builds[0]["dockerfile"]

def test_cli_project_config(runner, tmp_path, make_package, fake_toolchain, fake_docker, staging_parent):
    config = tmp_path / "godockerize.yml"
    config.write_text("base: alpine:3.18\ntag: acme/app:cfg\nenv:\n  - CFG=1\n")
    toolchain = fake_toolchain([make_package("example.com/app")])
    docker = fake_docker()
    result = runner.invoke(
        cli,
        ['-c', str(config), 'build', '--env', 'CLI=1', 'example.com/app'],
        obj={'orchestrator': make_orchestrator(toolchain, docker, staging_parent)},
    )
    assert result.exit_code == 0, result.output
    dockerfile = docker.builds[0]["dockerfile"]
    assert dockerfile.startswith("FROM alpine:3.18\n")
    assert "ENV CFG=1 CLI=1\n" in dockerfile
    assert docker.builds[0]["tag"] == "acme/app:cfg"

def test_cli_flag_overrides_config(runner, tmp_path, make_package, fake_toolchain, fake_docker, staging_parent):
    config = tmp_path / "godockerize.yml"
    config.write_text("base: alpine:3.18\n")
    toolchain = fake_toolchain([make_package("example.com/app")])
    result = runner.invoke(
        cli,
        ['-c', str(config), 'build', '--dry-run', '--base', 'alpine:3.20', 'example.com/app'],
        obj={'orchestrator': make_orchestrator(toolchain, fake_docker(), staging_parent)},
    )
    assert "  FROM alpine:3.20\n" in result.output

def test_cli_base_from_environment(runner, no_config, make_package, fake_toolchain, fake_docker, staging_parent):
    toolchain = fake_toolchain([make_package("example.com/app")])
    result = runner.invoke(
        cli,
        ['-c', no_config, 'build', '--dry-run', 'example.com/app'],
        obj={'orchestrator': make_orchestrator(toolchain, fake_docker(), staging_parent)},
        env={'GODOCKERIZE_BUILD_BASE': 'alpine:edge'},
        auto_envvar_prefix='GODOCKERIZE',
    )
    assert result.exit_code == 0, result.output
    assert "  FROM alpine:edge\n" in result.output

def test_cli_invalid_directive(runner, no_config, make_package, fake_toolchain, fake_docker, staging_parent):
    pkg = make_package("example.com/app", {"main.go": "package main\n\n//docker:frobnicate x\n"})
    result = runner.invoke(
        cli,
        ['-c', no_config, 'build', '--dry-run', 'example.com/app'],
        obj={'orchestrator': make_orchestrator(fake_toolchain([pkg]), fake_docker(), staging_parent)},
    )
    assert result.exit_code == 1
    assert "main.go:3:1: invalid docker comment: //docker:frobnicate x" in result.output
    assert "FROM" not in result.output

def test_cli_unknown_package(runner, no_config, fake_toolchain, fake_docker, staging_parent):
    result = runner.invoke(
        cli,
        ['-c', no_config, 'build', 'example.com/missing'],
        obj={'orchestrator': make_orchestrator(fake_toolchain([]), fake_docker(), staging_parent)},
    )
    assert result.exit_code == 1
    assert 'Error: cannot resolve package example.com/missing' in result.output

def test_cli_bad_config(runner, tmp_path):
    config = tmp_path / "godockerize.yml"
    config.write_text("- not\n- a mapping\n")
    result = runner.invoke(cli, ['-c', str(config), 'build', 'example.com/app'])
    assert result.exit_code == 1
    assert 'top level must be a mapping' in result.output

def test_cli_invalid_utf8_source(runner, no_config, make_package, fake_toolchain, fake_docker, staging_parent):
    pkg = make_package("example.com/app", {"main.go": ""})
    main_go = os.path.join(pkg.directory, "main.go")
    with open(main_go, "wb") as f:
        f.write(b"package main\n// caf\xe9\n")
    result = runner.invoke(
        cli,
        ['-c', no_config, 'build', '--dry-run', 'example.com/app'],
        obj={'orchestrator': make_orchestrator(fake_toolchain([pkg]), fake_docker(), staging_parent)},
    )
    assert result.exit_code == 1
    assert f"{main_go}:2:7: illegal UTF-8 encoding" in result.output

def test_cli_build_help_ignores_bad_config(runner, tmp_path):
    config = tmp_path / "godockerize.yml"
    config.write_text("base: [unclosed\n")
    result = runner.invoke(cli, ['-c', str(config), 'build', '--help'])
    assert result.exit_code == 0
    assert '--dry-run' in result.output
