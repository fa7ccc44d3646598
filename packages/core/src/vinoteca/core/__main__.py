"""CLI 入口模块 -- python -m vinoteca.core <command>

支持的命令：
  seed         向空库写入演示数据
  list-orders  列出订单（可选状态筛选）
"""

import asyncio
import sys

from .config import get_db_path, load_pricing_config


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m vinoteca.core <command>")
        print("命令:")
        print("  seed                 向空库写入演示数据")
        print("  list-orders [status] 列出订单")
        sys.exit(1)

    command = sys.argv[1]

    if command == "seed":
        asyncio.run(seed())
    elif command == "list-orders":
        status = sys.argv[2] if len(sys.argv) > 2 else None
        asyncio.run(list_orders(status))
    else:
        print(f"未知命令: {command}")
        print("可用命令: seed, list-orders")
        sys.exit(1)


async def seed() -> None:
    """执行种子数据写入"""
    from .seed import load_seed_data
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    try:
        loaded = await load_seed_data(store_group, config=load_pricing_config())
        print("种子数据写入完成" if loaded else "目录非空，跳过种子数据")
    finally:
        await store_group.conn.close()


async def list_orders(status: str | None) -> None:
    """打印订单摘要"""
    from .models import parse_order_status
    from .store import create_store_group

    parsed = parse_order_status(status) if status is not None else None
    if status is not None and parsed is None:
        print(f"invalid status {status}")
        sys.exit(1)

    store_group = await create_store_group(get_db_path())
    try:
        orders = await store_group.order_store.list_orders(
            status=parsed.value if parsed else None,
        )
        for order in orders:
            print(
                f"{order.code}  {order.status.value:<10}  "
                f"{order.total:>10.2f}  {order.customer_name}"
            )
        print(f"共 {len(orders)} 条订单")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
