#!/usr/bin/env python3
"""Configuration validation script."""

import argparse
import sys
from pathlib import Path

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tick_trader.config.loader import CONFIG_FILENAME, ConfigLoader
from tick_trader.config.validation import ConfigValidator


def main():
    """Main validation function."""
    parser = argparse.ArgumentParser(description="Validate tick trader configuration")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=project_root / "config",
        help=f"Directory containing {CONFIG_FILENAME}"
    )
    args = parser.parse_args()

    print(f"🔍 Validating {args.config_dir / CONFIG_FILENAME}...")

    loader = ConfigLoader.create(args.config_dir)

    try:
        config = loader.merge_config()
    except (OSError, yaml.YAMLError) as e:
        print(f"❌ Could not read configuration: {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(config)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    trading_config = loader.build(config)
    risk = trading_config.risk
    print(f"✅ Configuration is valid")
    print(f"  • symbol: {trading_config.account.symbol}")
    print(f"  • risk per trade: {risk.account_risk_percent}%")
    print(f"  • stop loss: {risk.stop_loss_percent}% (take profit x{risk.take_profit_ratio})")
    print(f"  • position size: [{risk.min_position_size}, {risk.max_position_size}]")
    print(f"  • daily loss limit: {risk.max_daily_loss_percent}%")
    print(f"  • persistence: {trading_config.persistence.backend} -> {trading_config.persistence.path}")
    sys.exit(0)


if __name__ == "__main__":
    main()
