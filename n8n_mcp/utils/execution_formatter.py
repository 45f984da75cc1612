"""
描述: 执行记录格式化工具
主要功能:
    - 执行摘要 (状态图标、耗时)
    - 执行详情 (各节点输出预览与错误信息)
    - 执行列表统计 (状态分布、成功率)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


_STATUS_INDICATORS = {
    "success": "✅",
    "error": "❌",
    "waiting": "⏳",
}
_DEFAULT_INDICATOR = "⏱️"
_PREVIEW_ITEMS = 3


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def get_status_indicator(status: Any) -> str:
    return _STATUS_INDICATORS.get(status, _DEFAULT_INDICATOR)


def _duration(execution: dict[str, Any], now: datetime | None = None) -> str:
    started = _parse_timestamp(execution.get("startedAt"))
    if started is None:
        return "unknown"
    # 未结束的执行以当前时间计算耗时
    stopped = _parse_timestamp(execution.get("stoppedAt")) or now or datetime.now(timezone.utc)
    return f"{round((stopped - started).total_seconds())}s"


def format_execution_summary(execution: dict[str, Any], now: datetime | None = None) -> dict[str, Any]:
    """
    生成执行摘要

    参数:
        execution: n8n 执行记录
        now: 计算运行中执行耗时所用的当前时间 (默认取系统时间)
    """
    status = execution.get("status")
    return {
        "id": execution.get("id"),
        "workflowId": execution.get("workflowId"),
        "status": f"{get_status_indicator(status)} {status}",
        "startedAt": execution.get("startedAt"),
        "stoppedAt": execution.get("stoppedAt") or "In progress",
        "duration": _duration(execution, now),
        "finished": execution.get("finished"),
    }


def _node_result(runs: Any) -> dict[str, Any]:
    last_run = runs[-1] if isinstance(runs, list) and runs else None
    if not isinstance(last_run, dict):
        return {"status": "unknown", "items": 0, "dataPreview": []}
    main = (last_run.get("data") or {}).get("main")
    if not isinstance(main, list):
        return {"status": last_run.get("status") or "unknown", "items": 0, "dataPreview": []}
    items = main[0] if main and isinstance(main[0], list) else []
    return {
        "status": last_run.get("status"),
        "items": len(items),
        "dataPreview": items[:_PREVIEW_ITEMS],
    }


def format_execution_details(execution: dict[str, Any], now: datetime | None = None) -> dict[str, Any]:
    """生成执行详情: 摘要 + 运行模式 + 各节点最后一次输出 + 错误信息"""
    details = format_execution_summary(execution, now)
    result_data = ((execution.get("data") or {}).get("resultData")) or {}
    run_data = result_data.get("runData") or {}

    node_results = {
        node_name: _node_result(runs)
        for node_name, runs in run_data.items()
    } if isinstance(run_data, dict) else {}

    error = result_data.get("error")
    details.update(
        {
            "mode": execution.get("mode"),
            "nodeResults": node_results,
            "error": {
                "message": error.get("message"),
                "stack": error.get("stack"),
            } if isinstance(error, dict) else None,
        }
    )
    return details


def summarize_executions(executions: list[dict[str, Any]], limit: int = 10) -> dict[str, Any]:
    """
    统计执行列表 (仅统计前 limit 条)

    返回:
        total/byStatus/successRate/displayed/totalAvailable
    """
    limited = executions[:limit]
    by_status: dict[str, int] = {}
    for execution in limited:
        status = execution.get("status") or "unknown"
        by_status[status] = by_status.get(status, 0) + 1

    total = len(limited)

    def percentage(count: int) -> int:
        return round(count / total * 100) if total else 0

    return {
        "total": total,
        "byStatus": [
            {
                "status": f"{get_status_indicator(status)} {status}",
                "count": count,
                "percentage": percentage(count),
            }
            for status, count in by_status.items()
        ],
        "successRate": f"{percentage(by_status.get('success', 0))}%",
        "displayed": total,
        "totalAvailable": len(executions),
    }
