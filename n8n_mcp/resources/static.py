"""
描述: n8n 静态资源
主要功能:
    - workflows / tags / users / variables / projects 概览
    - source-control 与 workflow-tags 操作说明
    - security-audit 审计状态摘要
"""

from __future__ import annotations

from typing import Any

from n8n_mcp.n8n.project import ProjectStatus
from n8n_mcp.n8n.variable import VariableType
from n8n_mcp.resources.base import BaseResource, ResourceRegistry, now_iso
from n8n_mcp.tools.registry import ToolRegistry


_AUDIT_LEVELS = (
    ("criticalIssues", "critical"),
    ("highIssues", "high"),
    ("mediumIssues", "medium"),
    ("lowIssues", "low"),
)
_RECENT_ISSUES = 5


def _links(uri: str) -> dict[str, str]:
    return {"self": uri}


# region 实体概览资源
@ResourceRegistry.register
class WorkflowsResource(BaseResource):
    uri = "n8n://workflows"
    name = "n8n Workflows"
    description = "List of all workflows in the n8n instance"
    label = "workflows"

    async def build(self) -> dict[str, Any]:
        workflows = await self.context.service.workflows.list_workflows()
        active = sum(1 for item in workflows if item.get("active"))
        return {
            "resourceType": "workflows",
            "count": len(workflows),
            "summary": {"active": active, "inactive": len(workflows) - active},
            "workflows": [
                {
                    "id": item.get("id"),
                    "name": item.get("name"),
                    "active": item.get("active"),
                    "updatedAt": item.get("updatedAt"),
                }
                for item in workflows
            ],
            "_links": _links(self.uri),
            "lastUpdated": now_iso(),
        }


@ResourceRegistry.register
class TagsResource(BaseResource):
    uri = "n8n://tags"
    name = "n8n Tags"
    description = "Tags available in the n8n instance"
    label = "tags"

    async def build(self) -> dict[str, Any]:
        tags = await self.context.service.tags.list_tags()
        by_color: dict[str, int] = {}
        for tag in tags:
            color = tag.get("color") or "no-color"
            by_color[color] = by_color.get(color, 0) + 1
        # ISO 时间字符串可直接按字典序比较
        recent = sorted(tags, key=lambda tag: str(tag.get("updatedAt") or ""), reverse=True)
        return {
            "resourceType": "tags",
            "count": len(tags),
            "summary": {"byColor": by_color},
            "recentTags": [
                {"id": tag.get("id"), "name": tag.get("name"), "color": tag.get("color")}
                for tag in recent[:10]
            ],
            "_links": _links(self.uri),
            "lastUpdated": now_iso(),
        }


@ResourceRegistry.register
class UsersResource(BaseResource):
    uri = "n8n://users"
    name = "n8n Users"
    description = "List of all users in the n8n instance with their basic information"
    label = "users"

    async def build(self) -> dict[str, Any]:
        users = await self.context.service.users.list_users()
        fields = ("id", "email", "firstName", "lastName", "role", "isPending", "createdAt")
        formatted = [{field: user.get(field) for field in fields} for user in users]
        return {
            "resourceType": "users",
            "count": len(formatted),
            "users": formatted,
            "_links": _links(self.uri),
            "lastUpdated": now_iso(),
        }


@ResourceRegistry.register
class VariablesResource(BaseResource):
    """变量概览 (不包含变量值)"""
    uri = "n8n://variables"
    name = "n8n Variables"
    description = "Variables available in the n8n instance"
    label = "variables"

    async def build(self) -> dict[str, Any]:
        variables = await self.context.service.variables.list_variables(
            include_system=True,
            include_values=False,
        )
        by_type = {
            item.value: sum(1 for variable in variables if variable.get("type") == item.value)
            for item in VariableType
        }
        system = sum(1 for variable in variables if variable.get("isSystem"))
        return {
            "resourceType": "variables",
            "count": len(variables),
            "summary": {
                "byType": by_type,
                "system": system,
                "user": len(variables) - system,
            },
            "recentVariables": [
                {
                    "id": variable.get("id"),
                    "key": variable.get("key"),
                    "type": variable.get("type") or "string",
                    "projectId": variable.get("projectId"),
                    "isSystem": bool(variable.get("isSystem")),
                }
                for variable in variables[:5]
            ],
            "_links": _links(self.uri),
            "lastUpdated": now_iso(),
        }


@ResourceRegistry.register
class ProjectsResource(BaseResource):
    uri = "n8n://projects"
    name = "n8n Projects"
    description = "Projects available in the n8n instance"
    label = "projects"

    async def build(self) -> dict[str, Any]:
        projects = await self.context.service.projects.list_projects()
        summary = {
            status.value: sum(1 for project in projects if project.get("status") == status.value)
            for status in (
                ProjectStatus.ACTIVE,
                ProjectStatus.DRAFT,
                ProjectStatus.ARCHIVED,
                ProjectStatus.COMPLETED,
            )
        }
        return {
            "resourceType": "projects",
            "count": len(projects),
            "summary": summary,
            "recentProjects": [
                {
                    "id": project.get("id"),
                    "name": project.get("name"),
                    "status": project.get("status"),
                    "workflowCount": len(project.get("workflowIds") or []),
                }
                for project in projects[:5]
            ],
            "_links": _links(self.uri),
            "lastUpdated": now_iso(),
        }
# endregion


# region 操作说明与审计资源
@ResourceRegistry.register
class SourceControlResource(BaseResource):
    uri = "n8n://source-control"
    name = "n8n Source Control"
    description = "Status of the source control repository in the n8n instance"
    label = "source control resource"

    async def build(self) -> dict[str, Any]:
        return {
            "resourceType": "sourceControl",
            "supportedOperations": ["pull"],
            "description": "Source control allows pulling changes from a connected repository",
            "_links": _links(self.uri),
            "lastUpdated": now_iso(),
        }


@ResourceRegistry.register
class WorkflowTagsResource(BaseResource):
    uri = "n8n://workflow-tags"
    name = "Workflow Tags Operations"
    description = "Operations for managing tags assigned to workflows"
    label = "workflow tag operations"

    async def build(self) -> dict[str, Any]:
        tools = []
        for tool_name in ("workflow_tags_list", "workflow_tags_update"):
            tool_cls = ToolRegistry.get(tool_name)
            if tool_cls is not None:
                tools.append(
                    {
                        "name": tool_cls.name,
                        "description": tool_cls.description,
                        "inputSchema": tool_cls.parameters,
                    }
                )
        return {
            "resourceType": "workflowTags",
            "tools": tools,
            "_links": _links(self.uri),
            "lastUpdated": now_iso(),
        }


@ResourceRegistry.register
class SecurityAuditResource(BaseResource):
    """
    安全审计摘要

    功能:
        - 按最高严重级别给出整体状态
        - 列出最多 5 个问题
    """
    uri = "n8n://security-audit"
    name = "n8n Security Audit"
    description = "Security audit status and summary for the n8n instance"
    label = "security audit"

    async def build(self) -> dict[str, Any]:
        audit = await self.context.service.security_audit.generate_audit()
        summary = audit.get("summary") or {}

        status = "secure"
        for field, level in _AUDIT_LEVELS:
            if (summary.get(field) or 0) > 0:
                status = level
                break

        recent_issues: list[dict[str, Any]] = []
        for workflow in audit.get("workflowResults") or []:
            for issue in workflow.get("issues") or []:
                if len(recent_issues) >= _RECENT_ISSUES:
                    break
                recent_issues.append(
                    {
                        "id": issue.get("id"),
                        "workflowId": workflow.get("workflowId"),
                        "workflowName": workflow.get("workflowName"),
                        "title": issue.get("title"),
                        "severity": issue.get("severity"),
                        "nodeName": issue.get("nodeName") or "Unknown",
                    }
                )

        return {
            "resourceType": "securityAudit",
            "status": status,
            "summary": {
                "totalWorkflows": summary.get("totalWorkflows"),
                "totalIssues": summary.get("issuesFound"),
                "criticalIssues": summary.get("criticalIssues"),
                "highIssues": summary.get("highIssues"),
                "mediumIssues": summary.get("mediumIssues"),
                "lowIssues": summary.get("lowIssues"),
            },
            "recentIssues": recent_issues,
            "_links": _links(self.uri),
            "lastUpdated": audit.get("auditDate") or now_iso(),
        }
# endregion
