"""Describes the Sous Chef domain. Centres around the `Kitchen`.

Where is the hard part?

- Recipes and drinks come out of a large language model behind an api.
- Photos come out of an image service we only ever build urls for.
- What is left is prompts, parsing, and which screen a flow is on.

The gateway is injected so all of it can be faked.
"""
