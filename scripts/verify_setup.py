#!/usr/bin/env python3
"""Verify that the tracker is configured and can reach the remote log."""

import argparse
import sys

from dotenv import load_dotenv


def check_dependencies():
    """Check that all core dependencies can be imported."""
    dependencies = [
        "pydantic",
        "pydantic_settings",
        "requests",
        "structlog",
        "watchdog",
        "yaml",
        "dotenv",
    ]

    failed = []
    for dep in dependencies:
        try:
            __import__(dep)
        except ImportError:
            failed.append(dep)

    if failed:
        print(f"❌ Failed to import: {', '.join(failed)}")
        return False

    print("✅ All core dependencies can be imported")
    return True


def check_configuration(config_path):
    """Load and validate the configuration.

    Returns:
        The loaded AppConfig, or None if loading failed
    """
    from editlog.utils.config_loader import ConfigLoader, ConfigurationError

    loader = ConfigLoader()
    try:
        config = loader.load_config(config_path)
    except ConfigurationError as e:
        print(f"❌ Configuration error: {e}")
        return None

    warnings = loader.validate_config(config)
    for warning in warnings:
        print(f"⚠️  {warning}")

    print("✅ Configuration loaded")
    return config


def check_remote_access(config):
    """Read the remote log once without writing to it."""
    from editlog.models.repository import InvalidRepositoryReference, RepositoryRef
    from editlog.providers import get_log_store
    from editlog.storage.log_store import LogStoreError

    try:
        repository = RepositoryRef.parse(config.repository.url)
        store = get_log_store(repository, config.repository)
        state = store.read_state(config.repository.log_path)
    except (InvalidRepositoryReference, LogStoreError, ValueError) as e:
        print(f"❌ Remote log not reachable: {e}")
        return False

    if state.exists:
        print(
            f"✅ {repository.full_name}/{config.repository.log_path} found "
            f"(revision {state.revision}, {len(state.content)} characters)"
        )
    else:
        print(
            f"✅ {repository.full_name} reachable; "
            f"{config.repository.log_path} will be created on the first flush"
        )
    return True


def main():
    """Run all verification checks."""
    parser = argparse.ArgumentParser(description="Verify edit tracker setup")
    parser.add_argument("--config", type=str, help="Path to configuration file", default=None)
    parser.add_argument(
        "--offline", action="store_true", help="Skip the remote access check"
    )
    args = parser.parse_args()
    load_dotenv()

    print("🔍 Verifying edit tracker setup...\n")

    checks = [check_dependencies()]
    config = check_configuration(args.config) if checks[0] else None
    checks.append(config is not None)
    if config is not None and not args.offline:
        checks.append(check_remote_access(config))

    print("\n" + "=" * 50)
    if all(checks):
        print("✅ Setup verification complete! All checks passed.")
        return 0
    else:
        print("❌ Setup verification failed. Please review the errors above.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
