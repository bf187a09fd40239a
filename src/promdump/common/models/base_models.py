# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import BaseModel, ConfigDict


class PromDumpBaseModel(BaseModel):
    """Base model for all promdump data models.

    Extra fields are rejected.
    """

    model_config = ConfigDict(extra="forbid")


class FrozenPromDumpModel(PromDumpBaseModel):
    """Immutable variant of `PromDumpBaseModel`."""

    model_config = ConfigDict(extra="forbid", frozen=True)
