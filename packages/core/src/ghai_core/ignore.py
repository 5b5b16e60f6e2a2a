""".gitignore generation from the languages, build tools and editors found in a project."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from ghai_core.models import ProjectInfo
from ghai_core.providers.base import BaseChatProvider
from ghai_core.utils.text import strip_code_fence

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
APPEND_MARKER = "# === generated by ghai ==="

# (file in the project root, project type, build tool)
_BUILD_MARKERS = (
    ("pom.xml", "Java", "Maven"),
    ("build.gradle", "Java", "Gradle"),
    ("build.gradle.kts", "Java", "Gradle"),
    ("package.json", "Node.js", "npm/yarn"),
    ("requirements.txt", "Python", "pip"),
    ("pyproject.toml", "Python", "pyproject"),
    ("setup.py", "Python", "setuptools"),
    ("go.mod", "Go", "Go Modules"),
    ("Cargo.toml", "Rust", "Cargo"),
    ("CMakeLists.txt", "C/C++", "CMake"),
    ("Makefile", "C/C++", "Make"),
    ("Gemfile", "Ruby", "Bundler"),
    ("composer.json", "PHP", "Composer"),
)

# (suffix of an entry in the project root, project type, build tool)
_SUFFIX_MARKERS = (
    (".csproj", ".NET/C#", "MSBuild"),
    (".sln", ".NET/C#", "MSBuild"),
)

_IDE_DIRS = ((".idea", "IntelliJ IDEA"), (".vscode", "VS Code"), (".project", "Eclipse"))
_IDE_SUFFIXES = ((".xcodeproj", "Xcode"), (".xcworkspace", "Xcode"))

_NODE_FRAMEWORKS = {"react": "React", "vue": "Vue", "next": "Next.js", "express": "Express"}


def _add(items: list[str], item: str) -> None:
    if item not in items:
        items.append(item)


def _node_packages(package_json: Path) -> set[str]:
    try:
        data = json.loads(package_json.read_text(encoding="utf-8", errors="replace"))
    except (OSError, ValueError):
        logger.debug("Could not parse %s", package_json)
        return set()
    if not isinstance(data, dict):
        return set()
    names: set[str] = set()
    for section in ("dependencies", "devDependencies"):
        deps = data.get(section)
        if isinstance(deps, dict):
            names.update(deps)
    return names


def _has_spring_boot(root: Path) -> bool:
    sources = root / "src" / "main" / "java"
    if not sources.is_dir():
        return False
    for path in sources.rglob("*.java"):
        try:
            if "@SpringBootApplication" in path.read_text(encoding="utf-8", errors="replace"):
                return True
        except OSError:
            continue
    return False


def analyze_project(root: Path) -> ProjectInfo:
    """Detect project types, build tools, editors and frameworks in ``root``."""
    root = Path(root)
    types: list[str] = []
    tools: list[str] = []
    ides: list[str] = []
    frameworks: list[str] = []
    detected: list[str] = []

    for filename, project_type, tool in _BUILD_MARKERS:
        if (root / filename).is_file():
            _add(types, project_type)
            _add(tools, tool)
            detected.append(filename)

    root_names = [p.name for p in root.iterdir()]
    for suffix, project_type, tool in _SUFFIX_MARKERS:
        matches = [name for name in root_names if name.endswith(suffix)]
        if matches:
            _add(types, project_type)
            _add(tools, tool)
            detected.extend(matches)

    for dirname, ide in _IDE_DIRS:
        if (root / dirname).exists():
            _add(ides, ide)
    for suffix, ide in _IDE_SUFFIXES:
        if any(name.endswith(suffix) for name in root_names):
            _add(ides, ide)

    if "package.json" in detected:
        packages = _node_packages(root / "package.json")
        for package, framework in _NODE_FRAMEWORKS.items():
            if package in packages:
                frameworks.append(framework)
        if "typescript" in packages:
            _add(types, "TypeScript")

    if "Java" in types and _has_spring_boot(root):
        frameworks.append("Spring Boot")

    return ProjectInfo(
        project_types=tuple(types) or (UNKNOWN,),
        build_tools=tuple(tools) or (UNKNOWN,),
        ides=tuple(ides) or (UNKNOWN,),
        frameworks=tuple(frameworks),
        detected_files=tuple(detected),
    )


def build_system_prompt(language: str = "zh") -> str:
    if language == "zh":
        return """你是一个专业的软件工程师，擅长创建完善的 .gitignore 文件。

规则：
1. 根据检测到的项目类型、构建工具、IDE 生成合适的忽略规则
2. 按类别分组，使用注释说明每个部分
3. 包含常见的系统文件（.DS_Store, Thumbs.db 等）
4. 包含常见的 IDE 文件和缓存
5. 包含构建产物、依赖目录、日志文件等
6. 只输出 .gitignore 内容，不要其他解释
7. 使用中文注释"""

    return """You are a software engineer who writes thorough .gitignore files.

Rules:
1. Add ignore rules for the detected project types, build tools and editors
2. Group rules by category with a comment heading each group
3. Include common OS files (.DS_Store, Thumbs.db, ...)
4. Include common IDE files and caches
5. Include build output, dependency directories and log files
6. Output only the .gitignore content, no explanations
7. Write comments in English"""


def build_user_prompt(info: ProjectInfo, existing: str = "", append: bool = False, language: str = "zh") -> str:
    zh = language == "zh"
    lines = [
        "请根据以下项目信息生成 .gitignore 文件：" if zh else "Write a .gitignore for this project:",
        "",
        f"{'项目类型' if zh else 'Project types'}: {', '.join(info.project_types)}",
        f"{'构建工具' if zh else 'Build tools'}: {', '.join(info.build_tools)}",
        f"{'IDE/编辑器' if zh else 'Editors'}: {', '.join(info.ides)}",
    ]
    if info.frameworks:
        lines.append(f"{'框架' if zh else 'Frameworks'}: {', '.join(info.frameworks)}")

    if append and existing.strip():
        lines += [
            "",
            "现有 .gitignore 内容（请不要重复这些规则）：" if zh else "Existing .gitignore (do not repeat these rules):",
            "```",
            existing.rstrip("\n"),
            "```",
            "",
            "请只生成需要补充的规则。" if zh else "Output only the rules that are missing.",
        ]
    return "\n".join(lines)


def generate_gitignore(
    provider: BaseChatProvider,
    info: ProjectInfo,
    existing: str = "",
    append: bool = False,
    language: Optional[str] = "zh",
) -> str:
    language = language or "zh"
    reply = provider.chat(build_system_prompt(language), build_user_prompt(info, existing, append, language))
    return strip_code_fence(reply)


def merge_gitignore(existing: str, generated: str) -> str:
    """Append ``generated`` rules below ``existing`` under a marker comment."""
    if not existing.strip():
        return generated
    return f"{existing.rstrip()}\n\n{APPEND_MARKER}\n{generated}"
