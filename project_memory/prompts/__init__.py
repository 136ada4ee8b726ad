# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Prompt Engine — Built-in templates, project overrides and composition.

Built-in templates live as files in templates/. A project may override
any of them (and add a shared base.md) under .project-memory/prompts/.
"""
