"""Command line front end for the cache simulator."""

from __future__ import annotations

import sys
from typing import Sequence

from cachesim.simulator import CacheGeometry, SimulationResult, simulate_file

USAGE = (
    "Numero de argumentos incorreto. Utilize:\n"
    "./cache_simulator <nsets> <bsize> <assoc> <substituição> <flag_saida> arquivo_de_entrada\n"
)


def format_report(
    geometry: CacheGeometry, policy_name: str, flag: int, result: SimulationResult
) -> str:
    """Render the report: 0 is verbose, 1 is one line, anything else is empty."""
    if flag == 0:
        lines = [
            "-- Informações da Cache:",
            f"\tNumero de Conjuntos: {geometry.nsets} bytes",
            f"\tTamanho do Bloco: {geometry.bsize} bytes",
            f"\tAssociatividade: {geometry.assoc}",
            f"\tSubstituição: {policy_name[:1]}",
            f"\tFlag de Saida: {flag}",
            f"\tTamanho da Cache: {geometry.size} bytes",
            f"\tBits de Indice: {geometry.index_bits}",
            f"\tBits de Offset: {geometry.offset_bits}",
            f"\tBits de Tag: {geometry.tag_bits}",
            "",
            "-- Informações do Acesso:",
            f"\tAcessos: {result.accesses}",
            f"\tTotalHits: {result.hits}",
            f"\tTotalMisses: {result.misses}",
            f"Taxa de Hit: {result.hit_rate:.4f}",
            f"Taxa de Miss: {result.miss_rate:.4f}",
            f"Taxa de Miss Compulsorio: {result.compulsory_rate:.4f}",
            f"Taxa de Miss Capacidade: {result.capacity_rate:.4f}",
            f"Taxa de Miss Conflito: {result.conflict_rate:.4f}",
        ]
        return "\n".join(lines) + "\n"
    if flag == 1:
        rates = (
            result.hit_rate,
            result.miss_rate,
            result.compulsory_rate,
            result.capacity_rate,
            result.conflict_rate,
        )
        return " ".join([str(result.accesses), *(f"{r:.4f}" for r in rates)]) + "\n"
    return ""


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulator: nsets bsize assoc policy flag trace_file."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 6:
        print(USAGE, end="")
        return 1

    nsets_text, bsize_text, assoc_text, policy_name, flag_text, path = args
    try:
        nsets, bsize, assoc, flag = (
            int(text) for text in (nsets_text, bsize_text, assoc_text, flag_text)
        )
        geometry = CacheGeometry(nsets, bsize, assoc)
    except ValueError as exc:
        print(f"Argumento inválido: {exc}")
        return 1

    try:
        result = simulate_file(path, geometry, policy_name)
    except ValueError:
        print("Substituição inválida")
        return 1
    except OSError:
        print("Erro ao abrir o arquivo.")
        return 1

    print(format_report(geometry, policy_name, flag, result), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())