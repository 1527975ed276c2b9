"""
Product Recommender - Main Entry Point
Interactive command-line loop over the same pipeline the API uses.
"""

from dotenv import load_dotenv
load_dotenv()

import asyncio

from backend.services.recommend_service import RecommendService
from recommender.catalog import CatalogError
from recommender.logging_config import configure_logging


def format_result(result: dict) -> str:
    """Render ranked products and the parsed intent as plain text."""
    lines = []
    parsed = result["debug"]["parsed"]
    lines.append(
        "Intent: category={category} brand={brand} price={price_min}..{price_max}".format(**parsed)
    )
    lines.append(f"Keywords: {', '.join(result['debug']['effectiveKeywords']) or '-'}")

    products = result["products"]
    if not products:
        lines.append("No matching products.")
    for i, product in enumerate(products, 1):
        lines.append(f"{i:2}. {product.get('title', '?')} - {product.get('price', '?')}")
    return "\n".join(lines)


async def run_cli(service: RecommendService):
    """Read prompts until the user quits, answering each on the same event loop."""
    while True:
        user_input = await asyncio.to_thread(input, "\nYou: ")
        if user_input.lower() in ["exit", "quit", "bye"]:
            print("Goodbye!")
            break

        if not user_input.strip():
            continue

        try:
            result = await service.recommend(user_input)
        except CatalogError as e:
            print(f"Catalog unavailable: {e}")
            continue
        print(format_result(result))


def main():
    """Main function to run the recommender interactively."""
    configure_logging(service_name="product-recommender-cli")
    print("Product Recommender\n" + "=" * 50)
    print("Type 'exit' to quit\n")

    asyncio.run(run_cli(RecommendService()))


if __name__ == "__main__":
    main()
