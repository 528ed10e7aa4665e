"""
OpenAI agent with Payman payment tools

A function calling agent that can search payees, check balances and send
payments through paykit.

Setup:
    pip install "paykit[openai]"

Usage:
    export PAYMAN_API_SECRET="..."
    export OPENAI_API_KEY="sk-..."
    python openai_payment_agent.py
"""
import asyncio

import openai

from paykit import PaykitToolHandler, paykit


async def main():
    # Setup
    client = openai.AsyncOpenAI()
    tools = paykit(environment="sandbox")
    handler = PaykitToolHandler(tools)

    messages = [
        {"role": "system", "content": "You are a helpful assistant with a Payman wallet. "
         "Look up saved payees before paying and check the balance first."},
        {"role": "user", "content": "Send a payment of $50 to Jon"},
    ]

    async with tools:
        # Conversation loop
        while True:
            response = await client.chat.completions.create(
                model="gpt-4o",
                messages=messages,
                tools=tools.to_openai_tools(),
            )

            message = response.choices[0].message
            messages.append(message.model_dump(exclude_none=True))

            if message.tool_calls:
                for tool_call in message.tool_calls:
                    messages.append(await handler.process_openai_tool_call(tool_call))
            else:
                print(f"Assistant: {message.content}")
                break


if __name__ == "__main__":
    asyncio.run(main())
