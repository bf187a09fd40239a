# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Shared test configuration and fixtures for all test types.

ONLY ADD FIXTURES HERE THAT ARE USED IN ALL TEST TYPES.
DO NOT ADD FIXTURES THAT ARE ONLY USED IN A SPECIFIC TEST TYPE.
"""

import logging

import pytest

from promdump.common.logging import CustomRichHandler


@pytest.fixture(autouse=True)
def remove_rich_handlers():
    """Remove the rich console handler installed by tests that set up logging."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if isinstance(handler, CustomRichHandler):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
