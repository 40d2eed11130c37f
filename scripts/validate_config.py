#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from kraken_trader.config.loader import ConfigLoader
from kraken_trader.config.validation import ConfigValidator
from kraken_trader.errors import ConfigurationError


def main():
    """Main validation function."""
    print("🔍 Validating kraken-trader configuration...")

    loader = ConfigLoader.create()
    all_valid = True

    print(f"\n📊 Validating {loader.config_dir / 'trader.yaml'}...")
    try:
        config = loader.load(require_credentials=False)
        print(f"✅ Configuration is valid for {config.trading.pair}")
    except ConfigurationError as e:
        print(f"❌ {e}")
        for message in e.errors:
            print(f"  • {message}")
        all_valid = False

    print("\n🔑 Checking credentials...")
    merged = loader.merge_config()
    errors = ConfigValidator.validate_credentials(merged.get("exchange", {}))
    if errors:
        for error in errors:
            print(f"  • {error.field}: {error.message}")
        print("⚠️  Credentials missing; orders cannot be signed")
    else:
        print("✅ Credentials present")

    if all_valid:
        print("\n🎉 Configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
