from sha2stream import Sha2Context, RunningHash

if __name__ == "__main__":
    message = b"The quick brown fox jumps over the lazy dog"

    ctx = Sha2Context(256)
    for i in range(0, len(message), 7):
        ctx.update(message[i : i + 7])
    print("SHA-256:", ctx.finalize().hex())

    ctx.init(224)
    ctx.update(message)
    print("SHA-224:", ctx.finalize().hex())

    running = RunningHash()
    for word in message.split(b" "):
        running.update(word + b" ")
        print(f"{running.total_length:3d} bytes -> {running.digest_hex()[:16]}...")
