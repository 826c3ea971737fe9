# src/mcp_kr_apartment/__init__.py
import click
from mcp_kr_apartment import server


@click.command()
@click.option("--transport", type=click.Choice(["stdio", "sse"]), default=None, help="MCP 전송 방식 (기본: TRANSPORT 환경변수)")
@click.option("--port", type=int, default=None, help="SSE 모드 포트 (기본: PORT 환경변수)")
def main(transport, port):
    """아파트 매매 실거래가 MCP 서버를 실행합니다."""
    server.main(transport=transport, port=port)


if __name__ == "__main__":
    main()
