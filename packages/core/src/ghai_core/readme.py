"""README generation from a project's build files and directory layout."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Optional

from ghai_core.models import ProjectContext
from ghai_core.providers.base import BaseChatProvider
from ghai_core.utils.text import strip_code_fence

logger = logging.getLogger(__name__)

TREE_MAX_DEPTH = 3
# Hidden entries (".git", ".venv", ...) are skipped as well.
TREE_SKIP = frozenset({"node_modules", "target", "build", "dist", "__pycache__", "venv"})

_REQUIREMENT_NAME_RE = re.compile(r"[=<>~!;\[\s@]")
_TOML_STRING_RE = r'^{key}\s*=\s*"([^"]*)"'


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def _xml_value(text: str, tag: str) -> str:
    match = re.search(rf"<{tag}>(.*?)</{tag}>", text, re.DOTALL)
    return match.group(1).strip() if match else ""


def _toml_value(text: str, key: str) -> str:
    match = re.search(_TOML_STRING_RE.format(key=key), text, re.MULTILINE)
    return match.group(1) if match else ""


def _requirement_names(text: str) -> list[str]:
    names = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith(("#", "-")):
            continue
        name = _REQUIREMENT_NAME_RE.split(line, 1)[0]
        if name:
            names.append(name)
    return names


def build_structure_tree(root: Path, max_depth: int = TREE_MAX_DEPTH) -> str:
    """Render ``root`` as an indented tree, ``max_depth`` levels deep."""
    root = Path(root)
    lines = [f"{root.resolve().name}/"]
    _walk(root, "", max_depth, lines)
    return "\n".join(lines) + "\n"


def _walk(directory: Path, prefix: str, depth: int, lines: list[str]) -> None:
    if depth <= 0:
        return
    try:
        entries = sorted(
            (p for p in directory.iterdir() if not p.name.startswith(".") and p.name not in TREE_SKIP),
            key=lambda p: p.name,
        )
    except OSError as e:
        logger.debug("Cannot list %s: %s", directory, e)
        return

    for i, entry in enumerate(entries):
        last = i == len(entries) - 1
        is_dir = entry.is_dir()
        lines.append(f"{prefix}{'└── ' if last else '├── '}{entry.name}{'/' if is_dir else ''}")
        if is_dir:
            _walk(entry, prefix + ("    " if last else "│   "), depth - 1, lines)


def analyze_project(root: Path) -> ProjectContext:
    """Collect name, description, type and dependencies from well-known build files.

    Later files win for name and description, so package.json overrides
    pom.xml in a mixed repository. Unparseable files are skipped.
    """
    root = Path(root)
    name = root.resolve().name
    description = ""
    types: list[str] = []
    dependencies: list[str] = []
    files: list[str] = []

    pom = root / "pom.xml"
    if pom.is_file():
        text = _read(pom)
        types.append("Java/Maven")
        name = _xml_value(text, "artifactId") or name
        description = _xml_value(text, "description") or description
        files.append("pom.xml")

    if (root / "build.gradle").is_file() or (root / "build.gradle.kts").is_file():
        if "Java/Maven" not in types:
            types.append("Java/Gradle")
        files.append("build.gradle")

    package_json = root / "package.json"
    if package_json.is_file():
        types.append("Node.js")
        try:
            data = json.loads(_read(package_json))
        except ValueError:
            logger.debug("Could not parse %s", package_json)
            data = {}
        if isinstance(data, dict):
            name = data.get("name") or name
            description = data.get("description") or description
            deps = data.get("dependencies")
            if isinstance(deps, dict):
                dependencies.extend(deps)
        files.append("package.json")

    requirements = root / "requirements.txt"
    if requirements.is_file():
        types.append("Python")
        dependencies.extend(_requirement_names(_read(requirements)))
        files.append("requirements.txt")

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        text = _read(pyproject)
        if "Python" not in types:
            types.append("Python")
        name = _toml_value(text, "name") or name
        description = _toml_value(text, "description") or description
        files.append("pyproject.toml")

    for marker, project_type in (("go.mod", "Go"), ("Cargo.toml", "Rust")):
        if (root / marker).is_file():
            types.append(project_type)
            files.append(marker)

    return ProjectContext(
        name=name,
        description=description,
        project_types=tuple(types) or ("Unknown",),
        dependencies=tuple(dependencies),
        main_files=tuple(files),
        structure_tree=build_structure_tree(root),
    )


def build_system_prompt(language: str = "zh") -> str:
    if language == "zh":
        return """你是一个专业的技术文档撰写专家，擅长为开源项目编写清晰、专业的 README.md 文件。

生成的 README 应该包含以下部分（根据项目实际情况选择）：
1. 项目标题和简介
2. 功能特性
3. 技术栈（如果能检测到）
4. 快速开始 / 安装说明
5. 使用方法
6. 项目结构（简化版）
7. 贡献指南（简短）
8. 许可证

规则：
- 使用中文撰写
- 使用 Markdown 格式
- 根据项目类型提供对应的安装和运行命令
- 保持简洁专业
- 只输出 README 内容，不要其他解释"""

    return """You are a technical writer who writes clear, professional README.md files for open source projects.

Include the following sections where they apply:
1. Project title and description
2. Features
3. Tech stack (if detectable)
4. Quick start / Installation
5. Usage
6. Project structure (simplified)
7. Contributing (brief)
8. License

Rules:
- Write in English
- Use Markdown
- Give install and run commands that match the project type
- Keep it concise and professional
- Output only the README content, no explanations"""


def build_user_prompt(context: ProjectContext, language: str = "zh") -> str:
    zh = language == "zh"
    lines = [
        "请根据以下项目信息生成 README.md 文件：" if zh else "Write a README.md for this project:",
        "",
        f"{'项目名称' if zh else 'Name'}: {context.name}",
        f"{'项目类型' if zh else 'Type'}: {', '.join(context.project_types)}",
    ]
    if context.description.strip():
        lines.append(f"{'项目描述' if zh else 'Description'}: {context.description}")
    if context.dependencies:
        lines.append(f"{'主要依赖' if zh else 'Dependencies'}: {', '.join(context.dependencies)}")
    lines += ["", "项目结构：" if zh else "Layout:", "```", context.structure_tree.rstrip("\n"), "```"]
    return "\n".join(lines)


def generate_readme(
    provider: BaseChatProvider,
    context: ProjectContext,
    language: Optional[str] = "zh",
) -> str:
    language = language or "zh"
    reply = provider.chat(build_system_prompt(language), build_user_prompt(context, language))
    return strip_code_fence(reply)
