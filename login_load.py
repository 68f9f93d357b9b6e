"""
login_load.py — simple async load script for registration and login

Registers COUNT users, then logs each of them in once with the right password
and once with a wrong one. Password hashing dominates the server-side cost, so
expect throughput to track CREDSTORE_HASH_COST.

Usage:
  python login_load.py --base http://127.0.0.1:8000 --count 200 --concurrency 20
"""
import argparse
import asyncio
import secrets
import time
from datetime import datetime, timezone

import httpx


def _now_iso():
    return datetime.now(timezone.utc).isoformat()


async def _register_one(client: httpx.AsyncClient, base: str, username: str, password: str):
    try:
        r = await client.post(f"{base}/users", json={"username": username, "password": password}, timeout=30)
        return r.status_code == 201
    except httpx.HTTPError:
        return False


async def _login_one(client: httpx.AsyncClient, base: str, username: str, password: str, expect_ok: bool):
    try:
        r = await client.post(f"{base}/users/login", json={"username": username, "password": password}, timeout=30)
        return (r.status_code == 200) == expect_ok
    except httpx.HTTPError:
        return False


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--base", default="http://127.0.0.1:8000")
    parser.add_argument("--count", type=int, default=200)
    parser.add_argument("--concurrency", type=int, default=20)
    args = parser.parse_args()

    run_tag = secrets.token_hex(4)
    accounts = [(f"load-{run_tag}-{i}", secrets.token_urlsafe(12)) for i in range(args.count)]

    start_iso = _now_iso()
    t0 = time.perf_counter()
    registered = 0
    logins_ok = 0

    limit = httpx.Limits(max_connections=args.concurrency, max_keepalive_connections=args.concurrency)
    async with httpx.AsyncClient(limits=limit) as client:
        sem = asyncio.Semaphore(args.concurrency)

        async def _register(username, password):
            nonlocal registered
            async with sem:
                if await _register_one(client, args.base, username, password):
                    registered += 1

        async def _login(username, password):
            nonlocal logins_ok
            async with sem:
                good = await _login_one(client, args.base, username, password, expect_ok=True)
                bad = await _login_one(client, args.base, username, password + "x", expect_ok=False)
                if good and bad:
                    logins_ok += 1

        await asyncio.gather(*(_register(u, p) for u, p in accounts))
        t_mid = time.perf_counter()
        await asyncio.gather(*(_login(u, p) for u, p in accounts))

    dt = time.perf_counter() - t0
    end_iso = _now_iso()
    print(f"START: {start_iso}")
    print(f"END:   {end_iso}")
    print(f"TOTAL: {dt:.3f} s")
    print(f"OPS:   registrations={args.count}, ok={registered}, fail={args.count - registered}")
    print(f"OPS:   login pairs={args.count}, ok={logins_ok}, fail={args.count - logins_ok}")
    if t_mid - t0 > 0:
        print(f"TPS:   {registered/(t_mid - t0):.1f} registrations/s")


if __name__ == "__main__":
    asyncio.run(main())
