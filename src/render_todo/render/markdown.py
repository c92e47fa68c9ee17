# src/render_todo/render/markdown.py

"""
Structured-text (markdown dialect) views.

Pages are assembled from string parts and returned as UTF-8 bytes. Site
chrome (header include, site navigation, footer include) is shown to every
viewer; the add form, filter links and task list only to connected viewers.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..tasks.task_models import Stats, Task, filter_tasks
from .common import (
    APP_TITLE,
    PROJECT_URL,
    form_link,
    include_directive,
    render_link,
    tx_link,
)

SITE_NAV = " | ".join(
    [render_link("Home", "/"), render_link("Tasks", "/tasks"), render_link("About", "/about")]
)
FILTER_NAV = " | ".join(
    [
        render_link("All", "/tasks"),
        render_link("Pending", "/tasks/pending"),
        render_link("Completed", "/tasks/completed"),
    ]
)


def _join(parts: Iterable[str]) -> bytes:
    return "".join(parts).encode("utf-8")


class MarkdownRenderer:
    def __init__(self, theme_contract: str) -> None:
        self._theme = theme_contract

    # ---- chrome ----

    def _open(self) -> list[str]:
        return [
            include_directive(self._theme, "header") + "\n",
            SITE_NAV + "\n\n",
            "---\n\n",
        ]

    def _close(self) -> str:
        return include_directive(self._theme, "footer")

    @staticmethod
    def header() -> bytes:
        return _join([f"# {APP_TITLE}\n\n", "*A demo app showcasing Soroban Render*\n\n", "---\n\n"])

    @staticmethod
    def footer() -> bytes:
        return _join(["\n---\n\n", f"*Powered by [Soroban Render]({PROJECT_URL})*\n"])

    # ---- pages ----

    def home(self, connected: bool) -> bytes:
        parts = self._open()
        parts += [
            "## Welcome to the Soroban Render Demo\n\n",
            "This is a **fully functional todo application** where the entire user "
            "interface is defined by the smart contract itself.\n\n",
            "> [!TIP]\n> This entire UI is generated by the smart contract's `render()` "
            "function. The markdown you see, including this callout, comes directly "
            "from the blockchain!\n\n",
            "### What makes this special?\n\n",
            "- **Self-contained UI**: The contract's `render()` function returns this "
            "markdown you're reading\n",
            "- **Interactive elements**: Forms and buttons trigger real blockchain transactions\n",
            "- **Per-user storage**: Each wallet has its own private task list\n",
            "- **Composability**: This app includes header/footer components from a "
            "separate theme contract\n\n",
        ]
        if connected:
            parts += [
                "> [!NOTE]\n> Your wallet is connected! You're ready to create and manage tasks.\n\n",
                "### Get Started\n\n",
                f"Head over to {render_link('Tasks', '/tasks')} to manage your todo list.\n\n",
            ]
        else:
            parts += [
                "> [!WARNING]\n> Connect your wallet (button in top-right) to create and "
                "manage your personal todo list.\n\n",
                "### Get Started\n\n",
                "Each user has their own private task list stored on the blockchain.\n\n",
            ]
        parts.append(self._close())
        return _join(parts)

    def about(self, stats: Stats) -> bytes:
        parts = self._open()
        parts += [
            "## About Soroban Render\n\n",
            "Soroban Render is a community convention for building **self-contained, "
            "renderable dApps** on Stellar's Soroban smart contract platform.\n\n",
            "> [!INFO]\n> Inspired by [Gno.land's Render() function]"
            "(https://docs.gno.land/users/explore-with-gnoweb/#viewing-rendered-content), "
            "Soroban Render allows smart contracts to define their own user interface.\n\n",
            "### Live Stats\n\n",
            ":::columns\n",
            "**Total Tasks**\n\n",
            f"# {stats.total_tasks}\n\ntasks stored on-chain\n",
            "|||\n",
            "**Unique Users**\n\n",
            f"# {stats.user_count}\n\nwallets with tasks\n",
            ":::\n\n",
            "### How It Works\n\n",
            ":::columns\n",
            "**1. Contract Renders UI**\n\nThe `render(path, viewer)` function returns "
            "markdown or JSON describing the interface.\n",
            "|||\n",
            "**2. Special Protocols**\n\n`render:` for navigation, `tx:` for transactions, "
            "`form:` for form submissions.\n",
            "|||\n",
            "**3. Universal Viewer**\n\nAny contract implementing `render()` can be viewed "
            "with the same generic viewer.\n",
            ":::\n\n",
            "### Learn More\n\n",
            f"- [View the source code on GitHub]({PROJECT_URL})\n",
            "- [Soroban Documentation](https://soroban.stellar.org/docs)\n",
            "- [Stellar Developer Portal](https://developers.stellar.org)\n\n",
        ]
        parts.append(self._close())
        return _join(parts)

    def task_list(self, tasks: list[Task], completed: bool | None, connected: bool) -> bytes:
        parts = self._open()

        if not connected:
            parts += [
                "## Connect Your Wallet\n\n",
                "**Please connect your wallet** to view and manage your personal todo list.\n\n",
                "Each user has their own private task list that only they can see and modify.\n\n",
            ]
            parts.append(self._close())
            return _join(parts)

        parts += [
            "## Add Task\n\n",
            '<textarea name="description" rows="2" placeholder="What needs to be done?"></textarea>\n\n',
            form_link("Add Task", "add_task") + "\n\n",
            "## Filter\n\n",
            FILTER_NAV + "\n\n",
            "## Your Tasks\n\n",
        ]

        shown = filter_tasks(tasks, completed)
        for task in shown:
            parts.append(self._task_line(task))

        if not shown:
            if completed is not None:
                parts.append("*No matching tasks.*\n\n")
            else:
                parts.append("*No tasks yet. Add one above!*\n\n")

        parts.append(self._close())
        return _join(parts)

    @staticmethod
    def _task_line(task: Task) -> str:
        args = {"id": task.id}
        if task.completed:
            line = f"- [x] ~~{task.description}~~ (#{task.id}) "
        else:
            line = f"- [ ] {task.description} (#{task.id}) "
            line += tx_link("Done", "complete_task", args) + " "
        return line + tx_link("Delete", "delete_task", args) + "\n"

    @staticmethod
    def task_detail(task: Task | None) -> bytes:
        parts = ["# Task Details\n\n"]

        if task is None:
            parts.append(f"*Task not found*\n\n{render_link('Back to list', '/')}\n")
            return _join(parts)

        status = "Completed" if task.completed else "Pending"
        args = {"id": task.id}
        parts += [
            f"**ID:** {task.id}\n\n",
            f"**Description:** {task.description}\n\n",
            f"**Status:** {status}\n\n",
        ]
        if not task.completed:
            parts.append(tx_link("Mark Complete", "complete_task", args) + " | ")
        parts.append(tx_link("Delete", "delete_task", args) + "\n\n")
        parts.append(render_link("Back to list", "/") + "\n")
        return _join(parts)
