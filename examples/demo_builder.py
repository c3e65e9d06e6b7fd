#!/usr/bin/env python3
"""Demonstration of the query builder.

This script shows how to:
1. Declare variables with typed defaults
2. Build nested selections with fragments and directives
3. Render a complete request document and its JSON payload

Note: This demo doesn't make real API calls - it just prints what a
transport would send.
"""

import json
from dataclasses import dataclass

from gql_querybuilder.core import (
    Document,
    FragmentDefinition,
    InlineFragment,
    InputObjectValue,
    NonNull,
    Object,
    Operation,
    OperationType,
    Scalar,
    VariableDefinition,
    include,
)


@dataclass
class ReviewInput(InputObjectValue):
    stars: int
    commentary: str | None = None


def main():
    print("=== Query Builder Demo ===\n")

    print("1. Declaring variables...")
    episode = VariableDefinition("episode", str, default="JEDI")
    with_friends = VariableDefinition("withFriends", NonNull[bool])
    for variable in (episode, with_friends):
        print(f"   {variable.type_erase().render()}")

    print("\n2. Building the query...")
    hero_fields = FragmentDefinition("heroFields", "Character", fields=["id", "name"])
    query = Operation(
        OperationType.QUERY,
        "HeroForEpisode",
        fields=[
            Object(
                "hero",
                arguments={"episode": episode},
                fields=[
                    Scalar("name", alias="heroName"),
                    Object("friends", fields=["name"], directives=[include(with_friends)]),
                ],
                fragments=[
                    hero_fields.spread(),
                    InlineFragment("Droid", fields=["primaryFunction"]),
                ],
            )
        ],
        variable_definitions=[episode, with_friends],
    )

    document = Document(query)
    print("\n   === Rendered document ===")
    print(document.render())

    print("\n3. Building a mutation with an input object default...")
    review = VariableDefinition("review", NonNull[ReviewInput], default=ReviewInput(5))
    mutation = Operation(
        OperationType.MUTATION,
        "CreateReview",
        fields=[Object("createReview", arguments={"review": review}, fields=["stars"])],
        variable_definitions=[review],
    )
    print(mutation.render())

    print("\n4. Request payload:")
    print(json.dumps(document.to_payload({"withFriends": True}), indent=2))

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
