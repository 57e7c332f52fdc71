"""Run the filter service.

Usage:
    python -m filter_service --port 8000 --dict-path "data/*.txt" --log-dir logs
"""
import argparse
import os

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Dictionary filter HTTP service")
    parser.add_argument("--host", default="0.0.0.0", help="address to bind")
    parser.add_argument("--port", type=int, default=8000, help="port to bind")
    parser.add_argument("--dict-path", help="dictionary files, glob pattern supported")
    parser.add_argument("--log-dir", help="log directory (stderr only when omitted)")
    args = parser.parse_args()

    # 命令行参数优先于环境变量，app 导入时通过 FilterConfig.from_env() 读取
    if args.dict_path:
        os.environ["DICT_PATH"] = args.dict_path
    if args.log_dir:
        os.environ["LOG_DIR"] = args.log_dir

    uvicorn.run("filter_service.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
