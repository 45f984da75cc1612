"""
描述: 工具调用结果封装
主要功能:
    - 定义 ToolResult / TextContent 结果模型
    - 成功与失败结果的统一格式化
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from n8n_mcp.errors import get_error_message


DEFAULT_SUCCESS_MESSAGE = "Operation completed successfully"


# region 结果模型
class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """工具调用结果信封"""
    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @property
    def text(self) -> str:
        return self.content[0].text if self.content else ""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
# endregion


# region 格式化函数
def format_success(data: Any = None, message: str | None = None) -> ToolResult:
    """
    构造成功结果

    参数:
        data: 结构化数据, 以缩进 JSON 形式放在第二个文本块
        message: 说明文本, 缺省为 "Operation completed successfully"
    """
    content = [TextContent(text=message or DEFAULT_SUCCESS_MESSAGE)]
    if data is not None:
        content.append(
            TextContent(text=json.dumps(data, indent=2, ensure_ascii=False, default=str))
        )
    return ToolResult(content=content, is_error=False)


def format_error(error: BaseException | str) -> ToolResult:
    """构造失败结果: 单个 "Error: <message>" 文本块"""
    return ToolResult(
        content=[TextContent(text=f"Error: {get_error_message(error)}")],
        is_error=True,
    )
# endregion
