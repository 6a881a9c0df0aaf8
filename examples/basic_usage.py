"""
Basic usage example for reldoc.

Encodes customers with their orders into a relational document, decodes it
back, and shows how best-effort and strict decoding treat an orphan block.
"""

import json

from pydantic import BaseModel

from reldoc import RelationPolicy, decode_document, encode_document


class Order(BaseModel):
    id: int
    item: str


class Customer(BaseModel):
    id: int
    name: str
    address: dict[str, str]
    orders: list[Order]


def main():
    customers = [
        Customer(id=1, name="Alice", address={"city": "NYC"}, orders=[Order(id=10, item="Book")]),
        Customer(id=2, name="Bob", address={"city": "LA"}, orders=[]),
    ]

    print("Step 1: encode")
    print("-" * 50)
    text = encode_document(customers, "clientes").unwrap()
    print(text)

    print("\nStep 2: decode (all leaf values come back as text)")
    print("-" * 50)
    print(json.dumps(decode_document(text).unwrap(), indent=2))

    print("\nStep 3: an orphan child block")
    print("-" * 50)
    orphan = text + "\n\norders(cliente_id:99)[1]{id,item}:\n12,Lamp."

    lenient = decode_document(orphan)
    print(f"skip policy:   ok={lenient.success}, warnings={lenient.warnings}")

    strict = decode_document(orphan, relation_policy=RelationPolicy.STRICT)
    print(f"strict policy: ok={strict.success}, error={strict.error!r}")


if __name__ == "__main__":
    main()
