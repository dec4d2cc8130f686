"""
Allow running the package with: python -m photofingerprint

Examples:
    python -m photofingerprint -g -s /photos -d /fingerprints
    python -m photofingerprint -f -s /fingerprints -d /unsorted
    python -m photofingerprint config          # Show configuration
    python -m photofingerprint config --init   # Create example config file
"""

import sys


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'config':
        sys.argv.pop(1)
        from .user_config import get_user_config

        config = get_user_config()

        if '--init' in sys.argv or '-i' in sys.argv:
            if config.create_example_config():
                print(f"Created example configuration file at:")
                print(f"  {config.config_file_path}")
            else:
                print(f"Failed to create configuration file.")
                sys.exit(1)
        else:
            print(f"Configuration file: {config.config_file_path}")
            if config.config_file_path.exists():
                print(f"Status: found")
            else:
                print(f"Status: not found (using defaults)")
                print(f"\nRun 'python -m photofingerprint config --init' to create one.")

            print(f"\nCurrent settings:")
            print(f"  default_threads: {config.default_threads}")
            print(f"  default_fuzz: {config.default_fuzz}")
            print(f"  low_distortion_threshold: {config.low_distortion_threshold}")
            print(f"  high_distortion_threshold: {config.high_distortion_threshold}")
            print(f"  poll_interval: {config.poll_interval}")
            print(f"  max_image_pixels: {config.max_image_pixels:,}")
    else:
        from .cli import main as cli_main
        sys.exit(cli_main())


if __name__ == '__main__':
    main()
