"""Describes the Prepper domain.

Recipes come from TheMealDB and get reshaped into our own `Recipe`. Nothing
is stored on the server. The meal plan and the recipes a user has marked
live with the client, in the stores, which write through to whatever storage
they are given.

What is hard here?

- Not much. Normalizing is a single pass over a flat record.
- The chat either goes to OpenAI or is answered from a handful of canned
  replies. Picking which happens before the message is looked at.
- The recipe estimates are random. Two lookups of the same meal disagree.
"""
