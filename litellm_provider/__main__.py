# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

from litellm_provider.cli import main

if __name__ == "__main__":
    main()
