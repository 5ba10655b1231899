from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

""" 远程表结构
couple_records: 两个人共用的一张记录表
"""


# 基类定义
class Base(DeclarativeBase):
    pass


# 日常记录
class CoupleRecordDB(Base):
    __tablename__ = "couple_records"

    # 客户端按创建时间生成的毫秒ID
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)

    # girl / boy
    user_type: Mapped[str] = mapped_column(String(10), nullable=False, index=True)

    # morning / noon / afternoon / evening / night
    time_period: Mapped[str] = mapped_column(String(20), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # 图片原样透传，不做存储优化
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # 共享时区下的日期, 例如 2026-10-19
    record_date: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # 服务端时间戳, 客户端不传时由数据库填充
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )


"""
SELECT * FROM couple_records ORDER BY created_at DESC;
"""
