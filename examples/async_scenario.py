#!/usr/bin/env uv run
# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "revalidate",
# ]
#
# [tool.uv.sources]
# revalidate = { path = "../", editable = true }
# ///

import asyncio

import httpx

from revalidate import (
    AsyncScenarioRunner,
    ETagValidator,
    ExplicitMutator,
    HarnessOptions,
    Scenario,
    ScenarioFailure,
    ServerTransport,
    ValidationServer,
)


async def main():
    transport = ServerTransport(ValidationServer())
    options = HarnessOptions(target="http://testserver")

    async with httpx.AsyncClient(transport=transport) as client:
        runner = AsyncScenarioRunner(options, client=client)
        scenario = Scenario("clock-etag", "/clock/etag/example/", ETagValidator(), ExplicitMutator())

        print(f"\n➡ Running {scenario.name} against {options.target}{scenario.path}...")
        try:
            await runner.run(scenario)
        except ScenarioFailure as exc:
            print(f"❌ {exc}")
        else:
            print("✅ The document was validated, updated and revalidated")


if __name__ == "__main__":
    asyncio.run(main())
