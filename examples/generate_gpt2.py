"""
Example: Completing a few prompts with GPT-2, greedy and sampled
"""

from genbench import GenBench


def main():
    print("=" * 60)
    print("genbench Example: Generating with GPT-2")
    print("=" * 60)

    print("\n1. Loading model...")
    bench = GenBench("openai-community/gpt2", device="cpu")

    prompt = "Once upon a time in a distant land"

    print("\n2. Greedy decoding (top_k=1)...")
    print(f"   {bench.generate(prompt, max_length=30, top_k=1)}")

    print("\n3. Sampling (temperature=1.2, top_k=10), seeded...")
    for seed in range(3):
        print(f"   [{seed}] {bench.generate(prompt, max_length=30, seed=seed)}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
